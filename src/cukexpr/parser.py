"""Parser for Cucumber Expressions.

Grammar (informal):
    expression  = (run | WHITE_SPACE)*
    run         = item+ ("/" item*)*       ; ALTERNATION_NODE when a "/" splits it
    item        = optional | parameter | text
    optional    = "(" (optional | text)* ")"
    parameter   = "{" TEXT? "}"
    text        = any single token

Nothing is ever rejected. An optional closes at the nearest following ")",
not at a balanced one. A "(" or "{" that cannot be matched is kept as literal
text, as are escaped characters, which keep the structural type they escaped.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from . import ast
from .ast import Token, TokenType
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parsed:
    """A sub-parser match: the node built and how many tokens it used."""

    consumed: int
    node: ast.AstNode


@dataclass(frozen=True)
class Scope:
    """The tokens a sub-parser may look at.

    `closes[i]` is the index of the first END_OPTIONAL at or after `i`, worked
    out once so each "(" finds its ")" without rescanning the input.
    """

    tokens: tuple[Token, ...]
    closes: tuple[int | None, ...]

    @classmethod
    def of(cls, tokens: Iterable[Token]) -> "Scope":
        tokens = tuple(tokens)
        closes: list[int | None] = [None] * (len(tokens) + 1)
        for index in range(len(tokens) - 1, -1, -1):
            if tokens[index].type is TokenType.END_OPTIONAL:
                closes[index] = index
            else:
                closes[index] = closes[index + 1]
        return cls(tokens, tuple(closes))

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]


# A sub-parser returns None when it does not apply at `current`.
SubParser = Callable[[Scope, int], Parsed | None]


def parse_text(scope: Scope, current: int) -> Parsed:
    """Any single token as literal text. Always matches."""
    return Parsed(1, ast.TextNode(token=scope[current].unescape()))


def parse_optional(scope: Scope, current: int) -> Parsed | None:
    if scope[current].type is not TokenType.BEGIN_OPTIONAL:
        return None
    end = scope.closes[current + 1]
    if end is None:
        logger.debug("unmatched '(' at token %d, keeping it as text", current)
        return None
    nodes = _parse_items(OPTIONAL_PARSERS, Scope.of(scope.tokens[current + 1 : end]))
    return Parsed(end - current + 1, ast.OptionalNode(nodes=nodes))


def parse_parameter(scope: Scope, current: int) -> Parsed | None:
    if scope[current].type is not TokenType.BEGIN_PARAMETER:
        return None
    following = [token.type for token in scope.tokens[current + 1 : current + 3]]
    if following[:1] == [TokenType.END_PARAMETER]:
        return Parsed(2, ast.ParameterNode())
    if following == [TokenType.TEXT, TokenType.END_PARAMETER]:
        name = ast.TextNode(token=scope[current + 1])
        return Parsed(3, ast.ParameterNode(nodes=(name,)))
    logger.debug("no parameter closes '{' at token %d, keeping it as text", current)
    return None


OPTIONAL_PARSERS: tuple[SubParser, ...] = (parse_optional,)
RUN_PARSERS: tuple[SubParser, ...] = (parse_optional, parse_parameter)


def _parse_item(parsers: Sequence[SubParser], scope: Scope, current: int) -> Parsed:
    for parser in parsers:
        parsed = parser(scope, current)
        if parsed is not None:
            return parsed
    return parse_text(scope, current)


def _parse_items(parsers: Sequence[SubParser], scope: Scope) -> tuple[ast.AstNode, ...]:
    nodes = []
    current = 0
    while current < len(scope):
        parsed = _parse_item(parsers, scope, current)
        nodes.append(parsed.node)
        current += parsed.consumed
    return tuple(nodes)


class Parser:
    """Builds the syntax tree for one tokenized expression."""

    def __init__(self, tokens: Iterable[Token]):
        self.scope = Scope.of(tokens)
        self.tokens = self.scope.tokens
        self.pos = 0

    def at(self, *types: TokenType) -> bool:
        return self.pos < len(self.tokens) and self.tokens[self.pos].type in types

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def parse(self) -> ast.ExpressionNode:
        """Parse the whole token sequence into an EXPRESSION_NODE."""
        self.pos = 0
        nodes: list[ast.AstNode] = []

        while not self.at_end():
            if self.at(TokenType.WHITE_SPACE):
                nodes.append(ast.TextNode(token=self.tokens[self.pos]))
                self.pos += 1
            else:
                nodes.extend(self.parse_run())

        return ast.ExpressionNode(nodes=nodes)

    def parse_run(self) -> list[ast.AstNode]:
        """Parse up to the next unescaped space, splitting on "/".

        Optionals and parameters are matched first, so a "/" inside a matched
        group never splits the run, and an optional may span spaces.
        """
        alternatives: list[list[ast.AstNode]] = [[]]

        while not self.at_end() and not self.at(TokenType.WHITE_SPACE):
            if self.at(TokenType.ALTERNATION):
                alternatives.append([])
                self.pos += 1
                continue
            parsed = _parse_item(RUN_PARSERS, self.scope, self.pos)
            alternatives[-1].append(parsed.node)
            self.pos += parsed.consumed

        if len(alternatives) == 1:
            return alternatives[0]
        return [
            ast.AlternationNode(
                nodes=[ast.AlternativeNode(nodes=nodes) for nodes in alternatives]
            )
        ]


def parse_tokens(tokens: Iterable[Token]) -> ast.ExpressionNode:
    """Parse an already tokenized expression."""
    return Parser(tokens).parse()


def parse(expression: str) -> ast.ExpressionNode:
    """Parse a Cucumber Expression into its syntax tree."""
    return parse_tokens(tokenize(expression))

"""Tokens and AST nodes for Cucumber Expressions."""

from enum import Enum
from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TokenType(str, Enum):
    BEGIN_OPTIONAL = "BEGIN_OPTIONAL"  # (
    END_OPTIONAL = "END_OPTIONAL"  # )
    BEGIN_PARAMETER = "BEGIN_PARAMETER"  # {
    END_PARAMETER = "END_PARAMETER"  # }
    ALTERNATION = "ALTERNATION"  # /
    WHITE_SPACE = "WHITE_SPACE"  # a single space
    TEXT = "TEXT"

    ESCAPED_BEGIN_OPTIONAL = "ESCAPED_BEGIN_OPTIONAL"  # \(
    ESCAPED_END_OPTIONAL = "ESCAPED_END_OPTIONAL"  # \)
    ESCAPED_BEGIN_PARAMETER = "ESCAPED_BEGIN_PARAMETER"  # \{
    ESCAPED_END_PARAMETER = "ESCAPED_END_PARAMETER"  # \}
    ESCAPED_ALTERNATION = "ESCAPED_ALTERNATION"  # \/
    ESCAPED_WHITE_SPACE = "ESCAPED_WHITE_SPACE"  # backslash + space

    ESCAPE = "ESCAPE"  # a backslash with nothing to escape

    @property
    def is_escaped(self) -> bool:
        return self in _UNESCAPED

    @property
    def unescaped(self) -> "TokenType":
        """The structural type an escaped type stands for (or the type itself)."""
        return _UNESCAPED.get(self, self)


_UNESCAPED = {
    TokenType.ESCAPED_BEGIN_OPTIONAL: TokenType.BEGIN_OPTIONAL,
    TokenType.ESCAPED_END_OPTIONAL: TokenType.END_OPTIONAL,
    TokenType.ESCAPED_BEGIN_PARAMETER: TokenType.BEGIN_PARAMETER,
    TokenType.ESCAPED_END_PARAMETER: TokenType.END_PARAMETER,
    TokenType.ESCAPED_ALTERNATION: TokenType.ALTERNATION,
    TokenType.ESCAPED_WHITE_SPACE: TokenType.WHITE_SPACE,
}


class Token(BaseModel):
    """One lexical unit and the raw source text it was read from."""

    model_config = ConfigDict(frozen=True)

    text: str  # backslash included for escaped types
    type: TokenType

    def unescape(self) -> "Token":
        """Drop the backslash, keeping the structural type it escaped."""
        if not self.type.is_escaped:
            return self
        return Token(text=self.text[1:], type=self.type.unescaped)


class NodeType(str, Enum):
    EXPRESSION_NODE = "EXPRESSION_NODE"
    OPTIONAL_NODE = "OPTIONAL_NODE"
    PARAMETER_NODE = "PARAMETER_NODE"
    ALTERNATION_NODE = "ALTERNATION_NODE"
    ALTERNATIVE_NODE = "ALTERNATIVE_NODE"
    TEXT_NODE = "TEXT_NODE"


# Nodes - using discriminated unions, each kind only accepts the children it can have
class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class _Branch(_Node):
    @property
    def text(self) -> str:
        return "".join(node.text for node in self.nodes)


class TextNode(_Node):
    """Literal text. Carries exactly one token and no children."""

    type: TypingLiteral[NodeType.TEXT_NODE] = NodeType.TEXT_NODE
    token: Token

    @field_validator("token")
    @classmethod
    def check_unescaped(cls, token: Token) -> Token:
        if token.type.is_escaped:
            raise ValueError(f"text node token must be unescaped, got {token.type.value}")
        return token

    @property
    def text(self) -> str:
        return self.token.text


class OptionalNode(_Branch):
    """Optional group, e.g. `(s)`. Holds text and nested optionals only."""

    type: TypingLiteral[NodeType.OPTIONAL_NODE] = NodeType.OPTIONAL_NODE
    nodes: tuple["OptionalItem", ...] = ()


class ParameterNode(_Branch):
    """Parameter placeholder, e.g. `{int}`. No child means anonymous `{}`."""

    type: TypingLiteral[NodeType.PARAMETER_NODE] = NodeType.PARAMETER_NODE
    nodes: tuple[TextNode, ...] = Field(default=(), max_length=1)


class AlternativeNode(_Branch):
    type: TypingLiteral[NodeType.ALTERNATIVE_NODE] = NodeType.ALTERNATIVE_NODE
    nodes: tuple["AlternativeItem", ...] = ()


class AlternationNode(_Branch):
    """Word choices such as `mice/rats`. Always two or more alternatives."""

    type: TypingLiteral[NodeType.ALTERNATION_NODE] = NodeType.ALTERNATION_NODE
    nodes: tuple[AlternativeNode, ...] = Field(min_length=2)


class ExpressionNode(_Branch):
    """Root of every parsed expression."""

    type: TypingLiteral[NodeType.EXPRESSION_NODE] = NodeType.EXPRESSION_NODE
    nodes: tuple["ExpressionItem", ...] = ()


OptionalItem = Annotated[TextNode | OptionalNode, Field(discriminator="type")]
AlternativeItem = Annotated[
    TextNode | OptionalNode | ParameterNode, Field(discriminator="type")
]
ExpressionItem = Annotated[
    TextNode | OptionalNode | ParameterNode | AlternationNode,
    Field(discriminator="type"),
]

# Node union type
AstNode = Annotated[
    ExpressionNode
    | OptionalNode
    | ParameterNode
    | AlternationNode
    | AlternativeNode
    | TextNode,
    Field(discriminator="type"),
]


def pretty(node: AstNode, indent: str = "  ") -> str:
    """Render a node as an indented tree, one node per line.

    Example:
        print(pretty(parse("three (blind) mice")))

        EXPRESSION_NODE
          TEXT_NODE 'three' TEXT
          TEXT_NODE ' ' WHITE_SPACE
          OPTIONAL_NODE
            TEXT_NODE 'blind' TEXT
          ...
    """
    lines: list[str] = []

    def walk(current: AstNode, depth: int) -> None:
        prefix = indent * depth
        if isinstance(current, TextNode):
            lines.append(
                f"{prefix}{current.type.value} {current.token.text!r} {current.token.type.value}"
            )
            return
        lines.append(f"{prefix}{current.type.value}")
        for child in current.nodes:
            walk(child, depth + 1)

    walk(node, 0)
    return "\n".join(lines)


# Rebuild models for forward references
OptionalNode.model_rebuild()
AlternativeNode.model_rebuild()
AlternationNode.model_rebuild()
ExpressionNode.model_rebuild()

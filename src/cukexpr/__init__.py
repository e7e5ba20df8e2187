"""cukexpr: tokenize and parse Cucumber Expressions into a syntax tree.

Pipeline: expression string -> tokens -> AST (EXPRESSION_NODE root).
Compiling the tree into a matcher is left to the caller.

Example:
    from cukexpr import parse, pretty

    tree = parse("I have {int} cucumber(s) in my belly/stomach")
    print(pretty(tree))
"""

__version__ = "0.1.0"

from .ast import (
    AlternationNode,
    AlternativeNode,
    AstNode,
    ExpressionNode,
    NodeType,
    OptionalNode,
    ParameterNode,
    TextNode,
    Token,
    TokenType,
    pretty,
)
from .fixtures import Fixture, FixtureError, check_fixture, load_fixture, load_fixtures
from .parser import Parsed, Parser, parse, parse_tokens
from .tokenizer import Tokenizer, dump_tokens, tokenize

__all__ = [
    # Tokenize
    "tokenize",
    "Tokenizer",
    "dump_tokens",
    "Token",
    "TokenType",
    # Parse
    "parse",
    "parse_tokens",
    "Parser",
    "Parsed",
    # AST
    "AstNode",
    "NodeType",
    "ExpressionNode",
    "OptionalNode",
    "ParameterNode",
    "AlternationNode",
    "AlternativeNode",
    "TextNode",
    "pretty",
    # Fixtures
    "Fixture",
    "FixtureError",
    "load_fixture",
    "load_fixtures",
    "check_fixture",
]

"""Tokenizer for Cucumber Expressions.

Token rules, first match wins at each position:
    escaped     = "\\" (" " | "(" | ")" | "{" | "}" | "/")
    escape      = "\\"
    structural  = " " | "(" | ")" | "{" | "}" | "/"
    text        = any run of other characters

A backslash that escapes nothing becomes an ESCAPE token on its own and
tokenizing carries on with the next character, so every input tokenizes and
the token texts always concatenate back to the input.
"""

import re
from collections.abc import Iterable, Iterator

from .ast import Token, TokenType


class Tokenizer:
    """Table-driven tokenizer; iterate it to get the tokens of one expression."""

    TOKEN_PATTERNS = [
        (re.compile(r"\\ "), TokenType.ESCAPED_WHITE_SPACE),
        (re.compile(r"\\\("), TokenType.ESCAPED_BEGIN_OPTIONAL),
        (re.compile(r"\\\)"), TokenType.ESCAPED_END_OPTIONAL),
        (re.compile(r"\\\{"), TokenType.ESCAPED_BEGIN_PARAMETER),
        (re.compile(r"\\\}"), TokenType.ESCAPED_END_PARAMETER),
        (re.compile(r"\\/"), TokenType.ESCAPED_ALTERNATION),
        (re.compile(r"\\"), TokenType.ESCAPE),
        (re.compile(r" "), TokenType.WHITE_SPACE),
        (re.compile(r"\("), TokenType.BEGIN_OPTIONAL),
        (re.compile(r"\)"), TokenType.END_OPTIONAL),
        (re.compile(r"\{"), TokenType.BEGIN_PARAMETER),
        (re.compile(r"\}"), TokenType.END_PARAMETER),
        (re.compile(r"/"), TokenType.ALTERNATION),
        (re.compile(r"[^ (){}/\\]+"), TokenType.TEXT),
    ]

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        pos = 0
        while pos < len(self.source):
            # The TEXT pattern matches whatever the others leave.
            for pattern, ttype in self.TOKEN_PATTERNS:
                m = pattern.match(self.source, pos)
                if m:
                    yield Token(text=m.group(0), type=ttype)
                    pos = m.end()
                    break


def tokenize(expression: str) -> Iterator[Token]:
    """Tokenize an expression. The result can be consumed once."""
    return iter(Tokenizer(expression))


def dump_tokens(tokens: Iterable[Token]) -> str:
    """One `TYPE 'text'` line per token, for debugging."""
    return "\n".join(f"{token.type.value} {token.text!r}" for token in tokens)

"""YAML fixtures pairing expressions with their expected tokens and tree.

Format:
    expression: "three (blind) mice"
    expected_tokens:
      - {text: three, type: TEXT}
      - {text: " ", type: WHITE_SPACE}
      ...
    expected_ast:
      type: EXPRESSION_NODE
      nodes:
        - type: TEXT_NODE
          token: {text: three, type: TEXT}
        ...

Either expectation may be left out. The tree uses the same shape as
`node.model_dump(mode="json")`, so a fixture can be written from a parse.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from .ast import AstNode, Token, pretty
from .parser import parse
from .tokenizer import dump_tokens, tokenize

logger = logging.getLogger(__name__)


class FixtureError(ValueError):
    def __init__(self, msg: str, path: str | Path):
        super().__init__(f"{path}: {msg}")
        self.path = Path(path)


class Fixture(BaseModel):
    """One expression and what it should tokenize and parse into."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    expression: str
    expected_tokens: tuple[Token, ...] | None = None
    expected_ast: AstNode | None = None
    path: Path | None = None

    @property
    def name(self) -> str:
        return self.path.stem if self.path else repr(self.expression)


def load_fixture(path: str | Path) -> Fixture:
    """Load a single fixture file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise FixtureError(f"cannot read fixture: {e}", path) from e
    except yaml.YAMLError as e:
        raise FixtureError(f"invalid YAML: {e}", path) from e

    if not isinstance(data, dict):
        raise FixtureError("fixture must be a mapping", path)

    try:
        return Fixture.model_validate({**data, "path": path})
    except ValidationError as e:
        raise FixtureError(f"invalid fixture: {e}", path) from e


def load_fixtures(directory: str | Path, pattern: str = "*.yaml") -> list[Fixture]:
    """Load every fixture in a directory, sorted by file name."""
    directory = Path(directory)
    fixtures = [load_fixture(p) for p in sorted(directory.glob(pattern))]
    if fixtures:
        logger.debug("loaded %d fixtures from %s", len(fixtures), directory)
    else:
        logger.warning("no fixtures matching %r in %s", pattern, directory)
    return fixtures


def check_fixture(fixture: Fixture) -> list[str]:
    """Compare a fixture with what the tokenizer and parser produce.

    Returns:
        Mismatch descriptions; empty when everything matches.
    """
    problems = []

    if fixture.expected_tokens is not None:
        actual_tokens = tuple(tokenize(fixture.expression))
        if actual_tokens != fixture.expected_tokens:
            problems.append(
                f"tokens of {fixture.expression!r} differ\n"
                f"expected:\n{dump_tokens(fixture.expected_tokens)}\n"
                f"actual:\n{dump_tokens(actual_tokens)}"
            )

    if fixture.expected_ast is not None:
        actual_ast = parse(fixture.expression)
        if actual_ast != fixture.expected_ast:
            problems.append(
                f"tree of {fixture.expression!r} differs\n"
                f"expected:\n{pretty(fixture.expected_ast)}\n"
                f"actual:\n{pretty(actual_ast)}"
            )

    return problems

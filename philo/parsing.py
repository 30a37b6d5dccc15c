"""Command-line number and settings parsing."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

INT_MAX = 2_147_483_647
_BLANKS = frozenset("\t\n\v\f\r ")
_DIGITS = frozenset("0123456789")


class ParseFailure(enum.Enum):
    """Why a number could not be read."""

    NEGATIVE = "negative"
    NOT_DIGIT = "not a digit"
    MAX_INT = "exceeds INT_MAX"


class ParseError(ValueError):
    """Raised when one or more arguments are not valid numbers."""

    def __init__(self, *failures: ParseFailure) -> None:
        self.failures = tuple(failures)
        super().__init__(", ".join(f.value for f in self.failures))


@dataclass(frozen=True)
class Settings:
    """Simulation parameters; times are in milliseconds."""

    count: int
    die_ms: int
    eat_ms: int
    sleep_ms: int
    meals: int | None = None


def parse_number(text: str) -> int:
    """Read a non-negative int the way the command line expects.

    Leading blanks and one '+' are allowed; reading stops at the first
    character that is not a digit.
    """
    pos = 0
    while pos < len(text) and text[pos] in _BLANKS:
        pos += 1
    if text.startswith("+", pos):
        pos += 1
    if text.startswith("-", pos):
        raise ParseError(ParseFailure.NEGATIVE)
    if pos >= len(text) or text[pos] not in _DIGITS:
        raise ParseError(ParseFailure.NOT_DIGIT)
    value = 0
    for char in text[pos:]:
        if char not in _DIGITS:
            break
        value = value * 10 + int(char)
        if value > INT_MAX:
            raise ParseError(ParseFailure.MAX_INT)
    return value


def parse_settings(args: Sequence[str]) -> Settings:
    """Build settings from four or five arguments (program name excluded).

    A bad meal count is reported alone; otherwise every bad value among the
    first four is reported together.
    """
    if len(args) not in (4, 5):
        raise ValueError("invalid number of arguments")
    meals = parse_number(args[4]) if len(args) == 5 else None
    values: list[int] = []
    failures: list[ParseFailure] = []
    for text in args[:4]:
        try:
            values.append(parse_number(text))
        except ParseError as exc:
            failures.extend(exc.failures)
    if failures:
        raise ParseError(*failures)
    count, die_ms, eat_ms, sleep_ms = values
    return Settings(count, die_ms, eat_ms, sleep_ms, meals)
"""Token categories, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    # Construct brackets ({{ }} and {% %})
    DELIMITER = "delimiter"

    # Identifiers
    KEYWORD = "keyword"
    VARIABLE = "variable"
    FUNCTION = "function"  # identifier followed by (
    METHOD = "method"  # builtin object method (append, split, ...)
    BUILTIN = "builtin"  # builtin filter/function (upper, length, ...)
    BOOLEAN = "boolean"

    # Literals and punctuation
    STRING = "string"
    NUMBER = "number"
    OPERATOR = "operator"
    FILTER = "filter"  # lone |

    # Whole {# ... #} construct
    COMMENT = "comment"


@dataclass(frozen=True, slots=True)
class Position:
    """Document position, 0-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Document range from start (inclusive) to end (exclusive)."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single classified span."""

    category: Category
    span: Span


Highlights = dict[Category, list[Span]]


def new_highlights() -> Highlights:
    """Return an empty mapping with every category present."""
    return {category: [] for category in Category}


def group_tokens(tokens: list[Token]) -> Highlights:
    """Group tokens by category, keeping scan order within each category."""
    highlights = new_highlights()
    for tok in tokens:
        highlights[tok.category].append(tok.span)
    return highlights


_IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_DIGITS = frozenset("0123456789")

# Characters that start an operator, and the ones that may extend it to two
OPERATOR_CHARS = frozenset("+-*/%=!<>|&~^")
OPERATOR_FOLLOW_CHARS = frozenset("=<>|&")

QUOTES = frozenset("\"'")


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin an identifier."""
    return ch in _IDENT_START


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue an identifier."""
    return ch in _IDENT_START or ch in _DIGITS


def is_digit(ch: str) -> bool:
    return ch in _DIGITS


def is_number_char(ch: str) -> bool:
    return ch in _DIGITS or ch == "."

"""Content classifier: splits the interior of one construct into tokens."""

from __future__ import annotations

from jinjahl.positions import PositionMapper
from jinjahl.tokens import (
    OPERATOR_CHARS,
    OPERATOR_FOLLOW_CHARS,
    QUOTES,
    Category,
    Span,
    Token,
    is_digit,
    is_ident_char,
    is_ident_start,
    is_number_char,
)
from jinjahl.vocabulary import classify_identifier


class ContentClassifier:
    """Classify the trimmed interior of a ``{{ }}`` or ``{% %}`` construct.

    Offsets inside the interior are local; ``base_offset`` is where the
    interior starts in the full document text, and the mapper converts the
    resulting document offsets into positions.
    """

    def __init__(self, interior: str, base_offset: int, mapper: PositionMapper) -> None:
        self._src = interior
        self._base = base_offset
        self._mapper = mapper
        self._pos = 0
        self._tokens: list[Token] = []

    def classify(self) -> list[Token]:
        """Scan the whole interior and return its tokens in order."""
        while self._pos < len(self._src):
            ch = self._src[self._pos]

            if ch.isspace():
                self._pos += 1
            elif ch in QUOTES:
                self._lex_string(ch)
            elif is_digit(ch):
                self._lex_number()
            elif ch in OPERATOR_CHARS:
                self._lex_operator(ch)
            elif is_ident_start(ch):
                self._lex_identifier()
            else:
                # Punctuation such as . , ( ) [ ] : carries no category
                self._pos += 1

        return self._tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._src):
            return self._src[idx]
        return ""

    def _emit(self, category: Category, start: int, end: int) -> None:
        span = Span(
            self._mapper.position(self._base + start),
            self._mapper.position(self._base + end),
        )
        self._tokens.append(Token(category, span))

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def _lex_string(self, quote: str) -> None:
        start = self._pos
        end = start + 1
        while end < len(self._src) and self._src[end] != quote:
            if self._src[end] == "\\" and end + 1 < len(self._src):
                end += 2
            else:
                end += 1
        if end < len(self._src):
            end += 1  # closing quote
        self._emit(Category.STRING, start, end)
        self._pos = end

    def _lex_number(self) -> None:
        # Permissive: "1.2.3" is one number token
        start = self._pos
        while self._pos < len(self._src) and is_number_char(self._src[self._pos]):
            self._pos += 1
        self._emit(Category.NUMBER, start, self._pos)

    def _lex_operator(self, ch: str) -> None:
        start = self._pos
        if self._peek(1) in OPERATOR_FOLLOW_CHARS:
            self._pos += 2
            self._emit(Category.OPERATOR, start, self._pos)
            return

        self._pos += 1
        if ch == "|":
            self._emit(Category.FILTER, start, self._pos)
        else:
            self._emit(Category.OPERATOR, start, self._pos)

    def _lex_identifier(self) -> None:
        start = self._pos
        while self._pos < len(self._src) and is_ident_char(self._src[self._pos]):
            self._pos += 1
        name = self._src[start : self._pos]

        # Call detection: next non-whitespace character is "("
        j = self._pos
        while j < len(self._src) and self._src[j].isspace():
            j += 1
        is_call = j < len(self._src) and self._src[j] == "("

        self._emit(classify_identifier(name, is_call), start, self._pos)


def classify(interior: str, base_offset: int, full_text: str) -> list[Token]:
    """Convenience function: classify one interior against the full document text."""
    return ContentClassifier(interior, base_offset, PositionMapper(full_text)).classify()

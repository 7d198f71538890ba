"""Construct scanner: finds {# #}, {{ }} and {% %} and classifies their contents."""

from __future__ import annotations

from jinjahl.classifier import ContentClassifier
from jinjahl.positions import PositionMapper
from jinjahl.tokens import Category, Highlights, Span, Token, group_tokens

COMMENT_OPEN = "{#"
COMMENT_CLOSE = "#}"

# Opening marker -> closing marker
CLOSERS: dict[str, str] = {
    COMMENT_OPEN: COMMENT_CLOSE,
    "{{": "}}",
    "{%": "%}",
}

_MARKER_LEN = 2


class ConstructScanner:
    """Scan document text left to right for template constructs.

    The first closing marker after an opener ends the construct, so
    constructs never nest. A construct with no closing marker runs to the
    end of the text.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._mapper = PositionMapper(text)
        self._pos = 0
        self._tokens: list[Token] = []

    def scan(self) -> list[Token]:
        """Scan the full text and return all tokens in scan order."""
        while True:
            start = self._find_opener()
            if start < 0:
                break
            opener = self._text[start : start + _MARKER_LEN]
            if opener == COMMENT_OPEN:
                self._scan_comment(start)
            else:
                self._scan_construct(start, CLOSERS[opener])
        return self._tokens

    def _find_opener(self) -> int:
        """Return the offset of the next opening marker at or after the cursor, or -1."""
        idx = self._text.find("{", self._pos)
        while idx >= 0:
            if self._text[idx : idx + _MARKER_LEN] in CLOSERS:
                return idx
            idx = self._text.find("{", idx + 1)
        return -1

    def _find_closer(self, closer: str, start: int) -> int:
        """Return the offset just past the closing marker, or -1 if unterminated."""
        idx = self._text.find(closer, start + _MARKER_LEN)
        if idx < 0:
            return -1
        return idx + _MARKER_LEN

    def _emit(self, category: Category, start: int, end: int) -> None:
        span = Span(self._mapper.position(start), self._mapper.position(end))
        self._tokens.append(Token(category, span))

    def _scan_comment(self, start: int) -> None:
        end = self._find_closer(COMMENT_CLOSE, start)
        if end < 0:
            end = len(self._text)
        self._emit(Category.COMMENT, start, end)
        self._pos = end

    def _scan_construct(self, start: int, closer: str) -> None:
        end = self._find_closer(closer, start)
        terminated = end >= 0
        if terminated:
            interior_end = end - _MARKER_LEN
        else:
            end = interior_end = len(self._text)

        self._emit(Category.DELIMITER, start, start + _MARKER_LEN)

        content = self._text[start + _MARKER_LEN : interior_end]
        stripped = content.strip()
        if stripped:
            base = start + _MARKER_LEN + (len(content) - len(content.lstrip()))
            self._tokens.extend(ContentClassifier(stripped, base, self._mapper).classify())

        if terminated:
            self._emit(Category.DELIMITER, interior_end, end)
        self._pos = end


def scan(text: str) -> list[Token]:
    """Convenience function: scan text and return tokens in scan order."""
    return ConstructScanner(text).scan()


def tokenize(text: str) -> Highlights:
    """Scan text and return its spans grouped by category."""
    return group_tokens(scan(text))

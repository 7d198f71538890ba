"""Offset to (line, column) mapping."""

from __future__ import annotations

from jinjahl.tokens import Position


def position_of(text: str, offset: int) -> Position:
    """Map a character offset in text to a 0-based line/column position.

    Offsets past the end of text are clamped to ``len(text)``.
    """
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset)
    last_newline = text.rfind("\n", 0, offset)
    return Position(line, offset - last_newline - 1, offset)


class PositionMapper:
    """Position lookups over one text, amortized O(1) for increasing offsets.

    Remembers the last mapped position and continues counting from there.
    A lookup behind the cached offset restarts from the beginning.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._last = Position(0, 0, 0)

    def position(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        last = self._last
        if offset < last.offset:
            last = Position(0, 0, 0)
        if offset == last.offset:
            return last

        newlines = self._text.count("\n", last.offset, offset)
        if newlines:
            column = offset - self._text.rfind("\n", last.offset, offset) - 1
        else:
            column = last.column + (offset - last.offset)
        pos = Position(last.line + newlines, column, offset)
        self._last = pos
        return pos

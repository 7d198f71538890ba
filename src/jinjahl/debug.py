"""Human-readable and JSON token dumps."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from jinjahl.tokens import Highlights, Token


def dump_tokens(source: str, tokens: list[Token], *, file: TextIO = sys.stdout) -> None:
    """Print one line per token: 1-based LINE:COL-LINE:COL, category, source text."""
    for tok in tokens:
        start, end = tok.span.start, tok.span.end
        text = source[start.offset : end.offset]
        file.write(
            f"{start.line + 1}:{start.column + 1}-{end.line + 1}:{end.column + 1}"
            f" {tok.category.value} {text!r}\n"
        )


def dump_json(highlights: Highlights, *, file: TextIO = sys.stdout) -> None:
    """Print ``{category: [[start_line, start_col, end_line, end_col], ...]}``, 0-based."""
    data = {
        category.value: [
            [span.start.line, span.start.column, span.end.line, span.end.column]
            for span in spans
        ]
        for category, spans in highlights.items()
    }
    json.dump(data, file, indent=2)
    file.write("\n")

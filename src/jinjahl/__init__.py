"""Jinja template highlighter: classifies template constructs for styling."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jinjahl.config import HighlightConfig
    from jinjahl.tokens import Highlights

__version__ = "0.1.0"


def highlight(
    text: str,
    path: str = "input.jinja",
    kind: str = "",
    config: HighlightConfig | None = None,
) -> Highlights:
    """Return the spans of text grouped by category, empty if the document is not eligible."""
    from jinjahl.config import HighlightConfig
    from jinjahl.policy import is_eligible
    from jinjahl.scanner import tokenize
    from jinjahl.tokens import new_highlights

    if not is_eligible(path, kind, config if config is not None else HighlightConfig()):
        return new_highlights()
    return tokenize(text)

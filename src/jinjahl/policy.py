"""Decide whether a document should be highlighted at all."""

from __future__ import annotations

from jinjahl.config import HighlightConfig

TEMPLATE_SUFFIXES: tuple[str, ...] = (".jinja", ".j2", ".jinja2")
TEXT_SUFFIX = ".txt"
PLAINTEXT_KIND = "plaintext"


def is_eligible(path: str | None, kind: str | None, config: HighlightConfig) -> bool:
    """Return True if the document identified by path/kind gets highlighted.

    Template files always qualify. Plain-text documents qualify only when
    both text-file switches are on. Everything else is skipped.
    """
    if path is None:
        return False

    if path.endswith(TEMPLATE_SUFFIXES):
        return True

    if path.endswith(TEXT_SUFFIX) or kind == PLAINTEXT_KIND:
        return config.general_enable_for_text_files and config.highlighting_enable_for_text_files

    return False

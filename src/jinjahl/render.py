"""Rendering collaborator interfaces and an in-memory implementation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from jinjahl.tokens import Category, Span


class StyleHandle(Protocol):
    """One visual style, bound to a single category."""

    def apply(self, path: str, spans: Sequence[Span]) -> None:
        """Replace the spans styled in document ``path``."""
        ...

    def clear(self, path: str) -> None:
        """Remove this style from document ``path``."""
        ...

    def dispose(self) -> None:
        """Release the style and clear everything it styled."""
        ...


class Renderer(Protocol):
    def create_style(self, category: Category) -> StyleHandle: ...


class MemoryStyle:
    """Style handle that records the spans applied per document."""

    def __init__(self, renderer: MemoryRenderer, category: Category) -> None:
        self._renderer = renderer
        self.category = category
        self.disposed = False

    def apply(self, path: str, spans: Sequence[Span]) -> None:
        if self.disposed:
            raise RuntimeError(f"style {self.category.value!r} used after dispose")
        self._renderer.applied.setdefault(path, {})[self.category] = list(spans)
        self._renderer.apply_count += 1

    def clear(self, path: str) -> None:
        if self.disposed:
            raise RuntimeError(f"style {self.category.value!r} used after dispose")
        self._renderer.applied.get(path, {}).pop(self.category, None)

    def dispose(self) -> None:
        if self.disposed:
            raise RuntimeError(f"style {self.category.value!r} disposed twice")
        self.disposed = True
        for by_category in self._renderer.applied.values():
            by_category.pop(self.category, None)


class MemoryRenderer:
    """Renderer that keeps the current styling in ``applied[path][category]``."""

    def __init__(self) -> None:
        self.applied: dict[str, dict[Category, list[Span]]] = {}
        self.styles: list[MemoryStyle] = []
        self.apply_count = 0

    def create_style(self, category: Category) -> MemoryStyle:
        style = MemoryStyle(self, category)
        self.styles.append(style)
        return style

    def spans(self, path: str, category: Category) -> list[Span]:
        return self.applied.get(path, {}).get(category, [])

"""Editing session: ties the active document, scheduler, and renderer together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from jinjahl.config import HighlightConfig
from jinjahl.policy import is_eligible
from jinjahl.render import Renderer, StyleHandle
from jinjahl.scanner import tokenize
from jinjahl.scheduler import DEBOUNCE_DELAY, TimerLoop, UpdateScheduler
from jinjahl.tokens import Category

logger = logging.getLogger(__name__)


class Document(Protocol):
    """A document owned by the host; text is read when a pass runs."""

    @property
    def path(self) -> str: ...

    @property
    def kind(self) -> str: ...

    def get_text(self) -> str: ...


@dataclass(slots=True)
class TextDocument:
    """Plain in-memory document."""

    path: str
    text: str
    kind: str = ""

    def get_text(self) -> str:
        return self.text


class HighlightSession:
    """Highlight state for one editing session.

    Owns one style handle per category (released on ``dispose()``) and the
    debounce scheduler. Passes always tokenize the active document's current
    text.
    """

    def __init__(
        self,
        renderer: Renderer,
        config: HighlightConfig | None = None,
        *,
        loop: TimerLoop,
        delay: float = DEBOUNCE_DELAY,
    ) -> None:
        self.config = config if config is not None else HighlightConfig()
        self._styles: dict[Category, StyleHandle] = {
            category: renderer.create_style(category) for category in Category
        }
        self._scheduler = UpdateScheduler(self.refresh, loop, delay)
        self._active: Document | None = None
        # Paths currently carrying this session's styling
        self._decorated: set[str] = set()
        self._disposed = False

    @property
    def active(self) -> Document | None:
        return self._active

    @property
    def scheduler(self) -> UpdateScheduler:
        return self._scheduler

    @property
    def disposed(self) -> bool:
        return self._disposed

    def set_active(self, document: Document | None) -> None:
        """Switch the active document and highlight it immediately."""
        self._active = document
        self.trigger(throttled=False)

    def document_changed(self, document: Document, throttled: bool = True) -> None:
        """React to an edit; edits to documents other than the active one are ignored."""
        if self._active is None or document.path != self._active.path:
            return
        self.trigger(throttled)

    def trigger(self, throttled: bool = True) -> None:
        self._scheduler.trigger(throttled)

    def refresh(self) -> None:
        """Run one highlight pass over the active document."""
        document = self._active
        if self._disposed or document is None:
            return
        if not is_eligible(document.path, document.kind, self.config):
            logger.debug("skipping %s: not eligible", document.path)
            if document.path in self._decorated:
                self._decorated.discard(document.path)
                for style in self._styles.values():
                    style.clear(document.path)
            return

        highlights = tokenize(document.get_text())
        for category, style in self._styles.items():
            style.apply(document.path, highlights[category])
        self._decorated.add(document.path)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._scheduler.dispose()
        for style in self._styles.values():
            style.dispose()
        self._decorated.clear()
        self._active = None

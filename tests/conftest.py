"""Shared test fixtures and helpers."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from jinjahl.scanner import scan
from jinjahl.tokens import Category, Token


@pytest.fixture
def lex():
    """Return a helper that scans source and returns (category, text) pairs."""

    def _lex(source: str) -> list[tuple[Category, str]]:
        return [(t.category, token_text(source, t)) for t in scan(source)]

    return _lex


def token_text(source: str, tok: Token) -> str:
    """Return the source text covered by a token."""
    return source[tok.span.start.offset : tok.span.end.offset]


def assert_categories(tokens: list[Token], expected: list[Category]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], category: Category) -> list[Token]:
    """Return all tokens of the given category."""
    return [t for t in tokens if t.category == category]


class FakeTimer:
    def __init__(self, loop: FakeLoop, when: float, callback: Callable[[], object]) -> None:
        self.loop = loop
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Manual clock implementing call_later; advance() fires due timers."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], object]) -> FakeTimer:
        timer = FakeTimer(self, self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self.timers if not t.cancelled and t.when <= self.now),
            key=lambda t: t.when,
        )
        for timer in due:
            self.timers.remove(timer)
            if not timer.cancelled:
                timer.callback()


@pytest.fixture
def loop() -> FakeLoop:
    return FakeLoop()

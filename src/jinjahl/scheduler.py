"""Debounced scheduling of highlight passes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum, auto
from typing import Protocol

logger = logging.getLogger(__name__)

DEBOUNCE_DELAY = 0.2  # seconds


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerLoop(Protocol):
    """The part of asyncio's event loop the scheduler relies on."""

    def call_later(self, delay: float, callback: Callable[[], object]) -> TimerHandle: ...


class SchedulerState(Enum):
    IDLE = auto()
    PENDING = auto()  # timer armed
    RUNNING = auto()
    DISPOSED = auto()


class UpdateScheduler:
    """Run a callback now or after a quiet period, coalescing bursts.

    A throttled trigger (re)arms a single timer, so a burst of triggers
    faster than ``delay`` yields one run. An unthrottled trigger cancels
    the timer and runs immediately. After ``dispose()`` triggers are ignored.
    """

    def __init__(
        self,
        run: Callable[[], None],
        loop: TimerLoop,
        delay: float = DEBOUNCE_DELAY,
    ) -> None:
        self._run = run
        self._loop = loop
        self._delay = delay
        self._timer: TimerHandle | None = None
        self._state = SchedulerState.IDLE

    @property
    def state(self) -> SchedulerState:
        return self._state

    def trigger(self, throttled: bool = True) -> None:
        if self._state is SchedulerState.DISPOSED:
            logger.debug("trigger after dispose ignored")
            return

        self._cancel_timer()
        if throttled:
            self._timer = self._loop.call_later(self._delay, self._fire)
            self._state = SchedulerState.PENDING
        else:
            self._execute()

    def dispose(self) -> None:
        self._cancel_timer()
        self._state = SchedulerState.DISPOSED

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        if self._state is SchedulerState.DISPOSED:
            return
        self._execute()

    def _execute(self) -> None:
        self._state = SchedulerState.RUNNING
        try:
            self._run()
        finally:
            if self._state is SchedulerState.RUNNING:
                self._state = SchedulerState.IDLE

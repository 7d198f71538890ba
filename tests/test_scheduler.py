"""Tests for the debounced update scheduler."""

from __future__ import annotations

import pytest

from jinjahl.scheduler import DEBOUNCE_DELAY, SchedulerState, UpdateScheduler


@pytest.fixture
def runs() -> list[int]:
    return []


@pytest.fixture
def scheduler(loop, runs) -> UpdateScheduler:
    return UpdateScheduler(lambda: runs.append(1), loop)


class TestThrottled:
    def test_arms_timer(self, scheduler, loop, runs) -> None:
        scheduler.trigger()
        assert scheduler.state is SchedulerState.PENDING
        assert len(loop.pending) == 1
        assert loop.pending[0].when == pytest.approx(DEBOUNCE_DELAY)
        assert runs == []

    def test_fires_after_delay(self, scheduler, loop, runs) -> None:
        scheduler.trigger()
        loop.advance(DEBOUNCE_DELAY)
        assert runs == [1]
        assert scheduler.state is SchedulerState.IDLE

    def test_burst_coalesces(self, scheduler, loop, runs) -> None:
        for _ in range(10):
            scheduler.trigger()
            loop.advance(DEBOUNCE_DELAY / 4)
        assert runs == []
        assert len(loop.pending) == 1
        loop.advance(DEBOUNCE_DELAY)
        assert runs == [1]

    def test_retrigger_cancels_previous_timer(self, scheduler, loop) -> None:
        scheduler.trigger()
        first = loop.pending[0]
        scheduler.trigger()
        assert first.cancelled

    def test_separate_bursts_run_separately(self, scheduler, loop, runs) -> None:
        scheduler.trigger()
        loop.advance(DEBOUNCE_DELAY)
        scheduler.trigger()
        loop.advance(DEBOUNCE_DELAY)
        assert runs == [1, 1]


class TestImmediate:
    def test_runs_now(self, scheduler, loop, runs) -> None:
        scheduler.trigger(throttled=False)
        assert runs == [1]
        assert scheduler.state is SchedulerState.IDLE
        assert loop.pending == []

    def test_cancels_pending_timer(self, scheduler, loop, runs) -> None:
        scheduler.trigger()
        scheduler.trigger(throttled=False)
        assert runs == [1]
        loop.advance(DEBOUNCE_DELAY)
        assert runs == [1]

    def test_running_state_during_callback(self, loop) -> None:
        seen = []
        sched = UpdateScheduler(lambda: seen.append(sched.state), loop)
        sched.trigger(throttled=False)
        assert seen == [SchedulerState.RUNNING]

    def test_returns_to_idle_after_error(self, loop) -> None:
        def boom() -> None:
            raise ValueError("boom")

        sched = UpdateScheduler(boom, loop)
        with pytest.raises(ValueError):
            sched.trigger(throttled=False)
        assert sched.state is SchedulerState.IDLE


class TestDispose:
    def test_cancels_timer(self, scheduler, loop, runs) -> None:
        scheduler.trigger()
        timer = loop.pending[0]
        scheduler.dispose()
        assert timer.cancelled
        loop.advance(DEBOUNCE_DELAY)
        assert runs == []
        assert scheduler.state is SchedulerState.DISPOSED

    def test_triggers_ignored_after_dispose(self, scheduler, loop, runs) -> None:
        scheduler.dispose()
        scheduler.trigger()
        scheduler.trigger(throttled=False)
        assert runs == []
        assert loop.pending == []

    def test_custom_delay(self, loop, runs) -> None:
        sched = UpdateScheduler(lambda: runs.append(1), loop, delay=1.0)
        sched.trigger()
        loop.advance(0.5)
        assert runs == []
        loop.advance(0.5)
        assert runs == [1]

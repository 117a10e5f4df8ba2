from __future__ import annotations

import io
import threading
import time

import pytest

from idleguard.cursor import CursorNudgeFailure
from idleguard.engine import IdleGuardLoop
from idleguard.models import IntervalConfig, RunConfig, SessionOutcome


def _loop(clock, run_config: RunConfig, seconds: int, nudge_fn, cancel_event=None, out=None):
    return IdleGuardLoop(
        run_config,
        IntervalConfig(seconds=seconds),
        cancel_event=cancel_event if cancel_event is not None else threading.Event(),
        nudge_fn=nudge_fn,
        out=out if out is not None else io.StringIO(),
        clock=clock,
        sleep=clock.sleep,
    )


@pytest.mark.parametrize(("minutes", "seconds", "expected"), [(1, 10, 6), (1, 30, 2), (2, 15, 8)])
def test_bounded_run_nudges_once_per_interval(clock, minutes: int, seconds: int, expected: int) -> None:
    nudge_times: list[float] = []

    result = _loop(
        clock, RunConfig(run_forever=False, duration_minutes=minutes), seconds, lambda: nudge_times.append(clock())
    ).run()

    assert result.outcome is SessionOutcome.EXPIRED
    assert result.state.move_count == expected
    assert len(nudge_times) == expected
    assert nudge_times[1] - nudge_times[0] == pytest.approx(seconds)
    assert result.elapsed_seconds == pytest.approx(minutes * 60)


def test_expiry_cuts_the_wait_short(clock) -> None:
    result = _loop(clock, RunConfig(run_forever=False, duration_minutes=1), 45, lambda: None).run()

    assert result.state.move_count == 2
    assert result.elapsed_seconds == pytest.approx(60)


def test_end_time_is_fixed_at_start(clock) -> None:
    result = _loop(clock, RunConfig(run_forever=False, duration_minutes=3), 60, lambda: None).run()

    assert result.state.start_time == 0
    assert result.state.end_time == 180


def test_waits_in_short_polling_slices(clock) -> None:
    _loop(clock, RunConfig(run_forever=False, duration_minutes=1), 30, lambda: None).run()

    assert clock.sleeps
    assert set(clock.sleeps) == {0.1}


def test_cancellation_stops_before_next_nudge(clock) -> None:
    cancel_event = threading.Event()
    calls: list[float] = []

    def nudge() -> None:
        calls.append(clock())
        if len(calls) == 3:
            cancel_event.set()

    result = _loop(clock, RunConfig(run_forever=True), 30, nudge, cancel_event=cancel_event).run()

    assert result.outcome is SessionOutcome.CANCELLED
    assert result.state.move_count == 3
    assert result.state.end_time is None
    assert result.elapsed_seconds == pytest.approx(60)


def test_cancelled_before_start_never_nudges(clock) -> None:
    cancel_event = threading.Event()
    cancel_event.set()
    calls: list[None] = []

    result = _loop(clock, RunConfig(run_forever=True), 30, lambda: calls.append(None), cancel_event=cancel_event).run()

    assert result.outcome is SessionOutcome.CANCELLED
    assert calls == []
    assert result.state.move_count == 0


def test_failed_nudge_still_counts_and_warns_once(clock) -> None:
    out = io.StringIO()
    attempts: list[int] = []

    def nudge() -> None:
        attempts.append(1)
        if len(attempts) == 1:
            raise CursorNudgeFailure("no pointer")

    result = _loop(clock, RunConfig(run_forever=False, duration_minutes=1), 30, nudge, out=out).run()

    assert result.state.move_count == 2
    assert len(attempts) == 2
    assert out.getvalue().count("Warning: Failed to move mouse cursor. Continuing...") == 1


def test_status_line_shows_elapsed_when_running_forever(clock) -> None:
    out = io.StringIO()
    cancel_event = threading.Event()
    calls: list[int] = []

    def nudge() -> None:
        calls.append(1)
        if len(calls) == 2:
            cancel_event.set()

    _loop(clock, RunConfig(run_forever=True), 90, nudge, cancel_event=cancel_event, out=out).run()

    assert out.getvalue() == (
        "\rMove Count: 1 | Running for: 0s"
        "\rMove Count: 2 | Running for: 1m 30s"
    )


def test_status_line_shows_remaining_when_bounded(clock) -> None:
    out = io.StringIO()

    _loop(clock, RunConfig(run_forever=False, duration_minutes=2), 90, lambda: None, out=out).run()

    assert out.getvalue() == (
        "\rMove Count: 1 | Time remaining: 2 minute(s)"
        "\rMove Count: 2 | Time remaining: 30 second(s)"
    )


def test_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        IdleGuardLoop(
            RunConfig(run_forever=True),
            IntervalConfig(seconds=0),
            cancel_event=threading.Event(),
            nudge_fn=lambda: None,
        )


def test_cancellation_latency_is_bounded_by_polling_slice() -> None:
    cancel_event = threading.Event()
    results = []
    nudges: list[float] = []

    loop = IdleGuardLoop(
        RunConfig(run_forever=True),
        IntervalConfig(seconds=30),
        cancel_event=cancel_event,
        nudge_fn=lambda: nudges.append(time.perf_counter()),
        out=io.StringIO(),
    )
    worker = threading.Thread(target=lambda: results.append(loop.run()), daemon=True)
    worker.start()

    time.sleep(0.2)
    cancelled_at = time.perf_counter()
    cancel_event.set()
    worker.join(timeout=1.0)

    assert not worker.is_alive()
    assert time.perf_counter() - cancelled_at < 0.5
    assert len(nudges) == 1
    assert results[0].outcome is SessionOutcome.CANCELLED

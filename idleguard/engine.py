from __future__ import annotations

import logging
import sys
import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import TextIO

from .cursor import CursorNudgeFailure
from .models import IntervalConfig, RunConfig, SessionOutcome, SessionResult, SessionState
from .timefmt import format_elapsed_time, format_remaining_time


logger = logging.getLogger(__name__)

LOOP_CHECK_INTERVAL_SECONDS = 0.1


class IdleGuardLoop:
    """Nudge the cursor every interval until the run time ends or ``cancel_event`` is set."""

    def __init__(
        self,
        run_config: RunConfig,
        interval: IntervalConfig,
        cancel_event: threading.Event,
        nudge_fn: Callable[[], None],
        out: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = LOOP_CHECK_INTERVAL_SECONDS,
    ) -> None:
        if interval.seconds < 1:
            raise ValueError("Interval must be at least 1 second.")
        if not run_config.run_forever and run_config.duration_minutes < 1:
            raise ValueError("Run time must be at least 1 minute.")

        self._run_config = run_config
        self._interval_seconds = interval.seconds
        self._cancel_event = cancel_event
        self._nudge_fn = nudge_fn
        self._out = out if out is not None else sys.stdout
        self._clock = clock
        self._sleep = sleep
        self._poll_interval = poll_interval

    def run(self) -> SessionResult:
        state = SessionState.begin(self._run_config, self._clock())

        while not self._cancel_event.is_set():
            if state.is_expired(self._clock()):
                break

            try:
                self._nudge_fn()
            except CursorNudgeFailure as exc:
                logger.debug("Cursor nudge failed: %s", exc)
                self._write("\nWarning: Failed to move mouse cursor. Continuing...\n")

            state.move_count += 1
            self._write(self._status_line(state))
            self._wait_for_next_tick(state)

        outcome = SessionOutcome.CANCELLED if self._cancel_event.is_set() else SessionOutcome.EXPIRED
        elapsed = self._clock() - state.start_time
        logger.debug("Session %s after %d move(s).", outcome.value, state.move_count)
        return SessionResult(outcome=outcome, state=state, elapsed_seconds=elapsed)

    def _wait_for_next_tick(self, state: SessionState) -> None:
        next_tick = self._clock() + self._interval_seconds
        while not self._cancel_event.is_set():
            now = self._clock()
            if now >= next_tick or state.is_expired(now):
                return
            self._sleep(self._poll_interval)

    def _status_line(self, state: SessionState) -> str:
        now = self._clock()
        if state.end_time is None:
            elapsed = format_elapsed_time(timedelta(seconds=now - state.start_time))
            return f"\rMove Count: {state.move_count} | Running for: {elapsed}"
        remaining = format_remaining_time(timedelta(seconds=state.end_time - now))
        return f"\rMove Count: {state.move_count} | Time remaining: {remaining}"

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

from __future__ import annotations

import contextlib
import logging
import signal
import sys
import threading
import time
from collections.abc import Callable, Iterator
from datetime import timedelta
from typing import TextIO

from .engine import IdleGuardLoop
from .models import RunConfig, SessionOutcome, SessionResult
from .settings import InvalidConfigInput, collect_interval_config, collect_run_config
from .timefmt import format_elapsed_time


logger = logging.getLogger(__name__)


@contextlib.contextmanager
def cancel_on_interrupt(cancel_event: threading.Event) -> Iterator[None]:
    """Route Ctrl+C (and Ctrl+Break on Windows) to ``cancel_event`` while active."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    signums = [signal.SIGINT]
    if hasattr(signal, "SIGBREAK"):
        signums.append(signal.SIGBREAK)

    def _handler(signum: int, _frame: object) -> None:
        logger.debug("Received %s; cancelling.", signal.Signals(signum).name)
        cancel_event.set()

    previous = {signum: signal.signal(signum, _handler) for signum in signums}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


class IdleGuardConsole:
    def __init__(
        self,
        wait_for_key: Callable[[], None],
        nudger_factory: Callable[[], Callable[[], None]],
        read_line: Callable[[], str] = input,
        out: TextIO | None = None,
        cancel_event: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        handle_signals: bool = True,
    ) -> None:
        self._wait_for_key = wait_for_key
        self._nudger_factory = nudger_factory
        self._read_line = read_line
        self._out = out if out is not None else sys.stdout
        self._cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self._clock = clock
        self._sleep = sleep
        self._handle_signals = handle_signals

    def run(self) -> int:
        self._echo("=== IdleGuard ===")

        try:
            run_config = collect_run_config(self._read_line, self._echo)
            interval = collect_interval_config(self._read_line, self._echo)
        except InvalidConfigInput as exc:
            logger.debug("Configuration rejected: %s", exc)
            return 0
        except (KeyboardInterrupt, EOFError):
            self._echo("")
            self._echo("Program stopped by user.")
            return 0

        try:
            self._echo("Press any key to start the mouse mover...")
            self._wait_for_key()
        except KeyboardInterrupt:
            self._echo("")
            self._echo("Program stopped by user.")
            return 0
        self._echo("")

        self._echo("Mouse mover is now running. Press Ctrl + C to stop the program.")
        self._echo("")

        loop = IdleGuardLoop(
            run_config,
            interval,
            cancel_event=self._cancel_event,
            nudge_fn=self._nudger_factory(),
            out=self._out,
            clock=self._clock,
            sleep=self._sleep,
        )
        interrupts = (
            cancel_on_interrupt(self._cancel_event)
            if self._handle_signals
            else contextlib.nullcontext()
        )
        with interrupts:
            result = loop.run()

        self._report(run_config, result)
        return 0

    def _report(self, run_config: RunConfig, result: SessionResult) -> None:
        self._echo("")
        if result.outcome is SessionOutcome.CANCELLED:
            self._echo("Program stopped by user.")
            self._echo(f"Total movements: {result.state.move_count}")
            elapsed = format_elapsed_time(timedelta(seconds=result.elapsed_seconds))
            self._echo(f"Running time: {elapsed}")
            return

        self._echo("=== Session Complete ===")
        self._echo(f"Total movements: {result.state.move_count}")
        if run_config.run_forever:
            self._echo(f"Runtime: {int(result.elapsed_seconds // 60)} minute(s)")
        else:
            self._echo(f"Runtime: {run_config.duration_minutes} minute(s)")
        self._echo("Program has finished. Press any key to exit...")
        with contextlib.suppress(KeyboardInterrupt):
            self._wait_for_key()

    def _echo(self, line: str) -> None:
        print(line, file=self._out, flush=True)

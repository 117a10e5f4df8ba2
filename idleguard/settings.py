from __future__ import annotations

import re
from collections.abc import Callable

from .models import IntervalConfig, RunConfig
from .timefmt import format_duration_message, format_interval_message


DEFAULT_MOVE_INTERVAL_SECONDS = 30

_INVALID_NUMBER_MESSAGE = "Invalid input. Please enter a valid number."

# Answers must fit a signed 32-bit integer, so at most ten significant digits.
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INTEGER_PATTERN = re.compile(r"[+-]?0*[0-9]{1,10}")


class InvalidConfigInput(ValueError):
    """Raised when a prompt answer is not a positive whole number."""


def _parse_positive(raw: str, non_positive_message: str, echo: Callable[[str], None]) -> int:
    text = raw.strip()
    if _INTEGER_PATTERN.fullmatch(text) is None or not _INT32_MIN <= int(text) <= _INT32_MAX:
        echo(_INVALID_NUMBER_MESSAGE)
        raise InvalidConfigInput(_INVALID_NUMBER_MESSAGE)

    value = int(text)

    if value <= 0:
        echo(non_positive_message)
        raise InvalidConfigInput(non_positive_message)
    return value


def collect_run_config(read_line: Callable[[], str], echo: Callable[[str], None]) -> RunConfig:
    echo("Please enter your desired run time (in minutes) [leave empty to run forever]:")
    raw = read_line()

    if not raw.strip():
        echo("The program will run forever (until manually stopped).")
        return RunConfig(run_forever=True)

    minutes = _parse_positive(raw, "Please enter a positive number for the run time.", echo)
    echo(format_duration_message(minutes, "The program will run for"))
    return RunConfig(run_forever=False, duration_minutes=minutes)


def collect_interval_config(
    read_line: Callable[[], str], echo: Callable[[str], None]
) -> IntervalConfig:
    echo(
        "Please enter how often you would like the mouse to move (in seconds) "
        f"[default: {DEFAULT_MOVE_INTERVAL_SECONDS}]:"
    )
    raw = read_line()

    if not raw.strip():
        echo(f"Using default interval: {DEFAULT_MOVE_INTERVAL_SECONDS} second(s).")
        return IntervalConfig(seconds=DEFAULT_MOVE_INTERVAL_SECONDS)

    seconds = _parse_positive(raw, "Please enter a positive number for the move interval.", echo)
    echo(format_interval_message(seconds))
    return IntervalConfig(seconds=seconds)

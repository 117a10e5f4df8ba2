"""Human-readable renderings of durations used by the prompts and status line."""

from __future__ import annotations

from datetime import timedelta


def format_duration_message(total_minutes: int, prefix: str) -> str:
    """Confirmation text for a configured run time, e.g. ``prefix 1 hour(s).``"""
    if total_minutes >= 60:
        hours, minutes = divmod(total_minutes, 60)
        if minutes == 0:
            return f"{prefix} {hours} hour(s)."
        return f"{prefix} {hours} hour(s) and {minutes} minute(s)."
    return f"{prefix} {total_minutes} minute(s)."


def format_interval_message(total_seconds: int) -> str:
    if total_seconds > 60:
        minutes, seconds = divmod(total_seconds, 60)
        return f"The mouse will move every {minutes} minute(s) and {seconds} second(s)."
    return f"The mouse will move every {total_seconds} second(s)."


def format_elapsed_time(elapsed: timedelta) -> str:
    total = max(int(elapsed.total_seconds()), 0)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def format_remaining_time(remaining: timedelta) -> str:
    """Remaining time without seconds once a full minute is left.

    The hour breakdown only starts above 60 minutes, so exactly one hour left
    reads ``60 minute(s)``.
    """
    total = max(int(remaining.total_seconds()), 0)
    remaining_minutes, remaining_seconds = divmod(total, 60)

    if remaining_minutes > 60:
        hours, minutes = divmod(remaining_minutes, 60)
        return f"{hours} hour(s) and {minutes} minute(s)"
    if remaining_minutes > 0:
        return f"{remaining_minutes} minute(s)"
    return f"{remaining_seconds} second(s)"

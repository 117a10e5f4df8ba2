from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import MonitorInfo


logger = logging.getLogger(__name__)


def list_monitors() -> list[MonitorInfo]:
    try:
        from screeninfo import ScreenInfoError, get_monitors
    except ImportError as exc:
        raise RuntimeError("The 'screeninfo' package is required to enumerate monitors.") from exc

    try:
        found = get_monitors()
    except ScreenInfoError as exc:
        raise RuntimeError(f"Unable to enumerate monitors: {exc}") from exc

    monitors = [
        MonitorInfo(x=int(m.x), y=int(m.y), width=int(m.width), height=int(m.height))
        for m in found
    ]
    logger.debug("Detected %d monitor(s).", len(monitors))
    return monitors


def monitor_at(monitors: Iterable[MonitorInfo], abs_x: int, abs_y: int) -> MonitorInfo | None:
    for monitor in monitors:
        if monitor.contains(abs_x, abs_y):
            return monitor
    return None


def nudge_direction(monitors: Iterable[MonitorInfo], abs_x: int, abs_y: int, offset: int) -> int:
    """Return +1 to nudge right, or -1 when that would push past the monitor's right edge."""
    monitor = monitor_at(monitors, abs_x, abs_y)
    if monitor is None or monitor.contains(abs_x + offset, abs_y):
        return 1
    return -1

from __future__ import annotations

import ctypes
import logging
import sys
import time
from collections.abc import Callable, Sequence
from typing import Protocol

from .models import CursorPosition, MonitorInfo
from .monitors import list_monitors, nudge_direction


logger = logging.getLogger(__name__)

MOUSE_MOVE_OFFSET_PIXELS = 1
MOUSE_MOVE_DELAY_SECONDS = 0.05


class CursorNudgeFailure(OSError):
    """The pointer position could not be read or written."""


class CursorBackend(Protocol):
    def get_position(self) -> CursorPosition: ...

    def set_position(self, x: int, y: int) -> None: ...


class _POINT(ctypes.Structure):
    _fields_ = [("x", ctypes.c_long), ("y", ctypes.c_long)]


def _configure_user32(user32: ctypes.LibraryLoader[ctypes.CDLL]) -> None:
    user32.GetCursorPos.argtypes = [ctypes.POINTER(_POINT)]
    user32.GetCursorPos.restype = ctypes.c_int
    user32.SetCursorPos.argtypes = [ctypes.c_int, ctypes.c_int]
    user32.SetCursorPos.restype = ctypes.c_int


class Win32CursorBackend:
    def __init__(self, user32: ctypes.LibraryLoader[ctypes.CDLL] | None = None) -> None:
        if user32 is None:
            if sys.platform != "win32":
                raise OSError("Cursor positioning is supported only on Windows.")
            user32 = ctypes.windll.user32
        _configure_user32(user32)
        self._user32 = user32

    def get_position(self) -> CursorPosition:
        point = _POINT()
        if not self._user32.GetCursorPos(ctypes.byref(point)):
            raise ctypes.WinError()
        return CursorPosition(x=int(point.x), y=int(point.y))

    def set_position(self, x: int, y: int) -> None:
        if not self._user32.SetCursorPos(int(x), int(y)):
            raise ctypes.WinError()


class NullCursorBackend:
    """Stand-in for hosts without a supported pointer API; every call succeeds."""

    def get_position(self) -> CursorPosition:
        return CursorPosition(x=0, y=0)

    def set_position(self, x: int, y: int) -> None:
        return None


def select_cursor_backend() -> CursorBackend:
    if sys.platform == "win32":
        return Win32CursorBackend()
    logger.info("No cursor API for platform %s; movements will be no-ops.", sys.platform)
    return NullCursorBackend()


class CursorNudger:
    """Move the pointer a few pixels and put it back."""

    def __init__(
        self,
        backend: CursorBackend,
        monitors: Sequence[MonitorInfo] = (),
        offset: int = MOUSE_MOVE_OFFSET_PIXELS,
        pause: float = MOUSE_MOVE_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if offset < 1:
            raise ValueError("Offset must be at least 1 pixel.")

        self._backend = backend
        self._monitors = tuple(monitors)
        self._offset = int(offset)
        self._pause = float(pause)
        self._sleep = sleep

    def __call__(self) -> None:
        try:
            origin = self._backend.get_position()
        except OSError as exc:
            raise CursorNudgeFailure(f"Unable to read cursor position: {exc}") from exc

        step = self._offset * nudge_direction(self._monitors, origin.x, origin.y, self._offset)
        try:
            self._backend.set_position(origin.x + step, origin.y)
            self._sleep(self._pause)
            self._backend.set_position(origin.x, origin.y)
        except OSError as exc:
            raise CursorNudgeFailure(f"Unable to move cursor: {exc}") from exc


def create_nudger() -> CursorNudger:
    backend = select_cursor_backend()
    monitors: list[MonitorInfo] = []
    if isinstance(backend, Win32CursorBackend):
        try:
            monitors = list_monitors()
        except RuntimeError as exc:
            logger.warning("Monitor detection unavailable, nudging right only: %s", exc)
    return CursorNudger(backend, monitors)

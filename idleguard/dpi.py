import ctypes
import logging
import sys


logger = logging.getLogger(__name__)

_PER_MONITOR_AWARE_V2 = ctypes.c_void_p(-4)
_PER_MONITOR_AWARE = 2
_S_OK = 0
_E_ACCESSDENIED = -2147024891


def set_dpi_awareness() -> str:
    """Opt into per-monitor DPI so GetCursorPos and monitor bounds share physical pixels.

    Returns the mode that took effect. ``E_ACCESSDENIED`` from shcore means an
    awareness mode was already fixed for the process (by a manifest, say),
    which is as good as success here.
    """
    if sys.platform != "win32":
        return "unsupported-platform"

    user32 = ctypes.windll.user32
    shcore = getattr(ctypes.windll, "shcore", None)

    attempts = [
        ("per-monitor-v2", lambda: bool(user32.SetProcessDpiAwarenessContext(_PER_MONITOR_AWARE_V2))),
        (
            "per-monitor-v1",
            lambda: shcore is not None
            and shcore.SetProcessDpiAwareness(_PER_MONITOR_AWARE) in (_S_OK, _E_ACCESSDENIED),
        ),
        ("system-dpi-aware", lambda: bool(user32.SetProcessDPIAware())),
    ]
    for mode, attempt in attempts:
        try:
            if attempt():
                logger.debug("DPI awareness set to %s.", mode)
                return mode
        except AttributeError:
            # Entry point missing on older Windows builds.
            continue

    logger.warning("Unable to set DPI awareness; cursor nudges may use scaled coordinates.")
    return "dpi-awareness-unavailable"

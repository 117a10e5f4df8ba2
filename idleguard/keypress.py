from __future__ import annotations

import threading

from pynput import keyboard


_POLL_SECONDS = 0.1


class KeypressGate:
    """Block until any key is pressed, without consuming console input."""

    def __init__(self) -> None:
        self._pressed = threading.Event()
        self._listener: keyboard.Listener | None = None
        self._lock = threading.Lock()

    def wait(self) -> None:
        self._pressed.clear()
        self._start()
        try:
            # Short waits keep Ctrl+C deliverable to the main thread.
            while not self._pressed.wait(_POLL_SECONDS):
                pass
        finally:
            self._stop()

    def _start(self) -> None:
        with self._lock:
            if self._listener is not None:
                return
            self._listener = keyboard.Listener(on_press=self._on_press)
            self._listener.daemon = True
            self._listener.start()

    def _stop(self) -> None:
        with self._lock:
            listener = self._listener
            self._listener = None

        if listener is not None:
            listener.stop()
            listener.join(timeout=1.0)

    def _on_press(self, key: keyboard.Key | keyboard.KeyCode | None) -> bool:
        self._pressed.set()
        return False

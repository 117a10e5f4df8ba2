from __future__ import annotations

import pytest


class FakeClock:
    """Monotonic clock advanced only by ``sleep``; kept in whole milliseconds."""

    def __init__(self) -> None:
        self._ms = 0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self._ms / 1000

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self._ms += round(seconds * 1000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

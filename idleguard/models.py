from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class RunConfig:
    run_forever: bool
    duration_minutes: int = 0


@dataclass(frozen=True)
class IntervalConfig:
    seconds: int


@dataclass(frozen=True)
class MonitorInfo:
    x: int
    y: int
    width: int
    height: int

    def contains(self, abs_x: int, abs_y: int) -> bool:
        return self.x <= abs_x < self.x + self.width and self.y <= abs_y < self.y + self.height


@dataclass(frozen=True)
class CursorPosition:
    x: int
    y: int


@dataclass
class SessionState:
    start_time: float
    end_time: float | None = None
    move_count: int = 0

    @classmethod
    def begin(cls, run_config: RunConfig, now: float) -> SessionState:
        if run_config.run_forever:
            return cls(start_time=now)
        return cls(start_time=now, end_time=now + run_config.duration_minutes * 60)

    def is_expired(self, now: float) -> bool:
        return self.end_time is not None and now >= self.end_time


class SessionOutcome(enum.Enum):
    EXPIRED = "expired"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SessionResult:
    outcome: SessionOutcome
    state: SessionState
    elapsed_seconds: float

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from ..core.enums import TimerStatus


@dataclass(frozen=True)
class BreakEntry:
    """A labeled pause inside a shift, excluded from worked time."""

    type: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: int = 0

    def with_duration(self, duration_seconds: int) -> "BreakEntry":
        return replace(self, duration_seconds=max(int(duration_seconds), 0))

    def closed_at(self, end_time: datetime, duration_seconds: int) -> "BreakEntry":
        return replace(self, end_time=end_time, duration_seconds=max(int(duration_seconds), 0))


@dataclass(frozen=True)
class ShiftSnapshot:
    """Immutable record of a finished shift, handed to persistence."""

    start_time: datetime
    end_time: datetime
    elapsed_work_seconds: int
    breaks: tuple[BreakEntry, ...] = ()


@dataclass(frozen=True)
class ShiftTimerState:
    """Read-only view of a shift timer for display polling."""

    is_running: bool = False
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    elapsed_work_seconds: int = 0
    breaks: tuple[BreakEntry, ...] = field(default_factory=tuple)
    current_break: Optional[BreakEntry] = None

    @property
    def status(self) -> TimerStatus:
        if not self.is_running:
            return TimerStatus.INACTIVE
        if self.current_break is not None:
            return TimerStatus.ON_BREAK
        return TimerStatus.ACTIVE

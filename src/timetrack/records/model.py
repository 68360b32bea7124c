from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..timer.model import BreakEntry, ShiftSnapshot
from ..timer.summary import total_break_seconds, total_shift_seconds


@dataclass(frozen=True)
class TimeRecord:
    """Domain entity: a stored shift of one employee."""

    record_id: str
    employee_id: str
    clock_in_time: datetime
    clock_out_time: Optional[datetime]
    location: str
    total_work_seconds: int
    breaks: tuple[BreakEntry, ...] = ()
    employee_name: str = ""

    @property
    def total_break_seconds(self) -> int:
        return total_break_seconds(self.breaks)

    @property
    def total_shift_seconds(self) -> int:
        return total_shift_seconds(self.total_work_seconds, self.breaks)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: ShiftSnapshot,
        *,
        employee_id: str,
        location: str,
        employee_name: str = "",
        record_id: Optional[str] = None,
    ) -> "TimeRecord":
        return cls(
            record_id=record_id or uuid.uuid4().hex,
            employee_id=employee_id,
            clock_in_time=snapshot.start_time,
            clock_out_time=snapshot.end_time,
            location=location,
            total_work_seconds=snapshot.elapsed_work_seconds,
            breaks=tuple(snapshot.breaks),
            employee_name=employee_name,
        )

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimeRecord


class TimeRecordRepository(Protocol):
    def add(self, record: TimeRecord) -> TimeRecord:
        raise NotImplementedError

    def get(self, record_id: str) -> Optional[TimeRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, limit: int) -> Sequence[TimeRecord]:
        """Most recent first."""
        raise NotImplementedError

    def list_all(self) -> Sequence[TimeRecord]:
        """Oldest first."""
        raise NotImplementedError

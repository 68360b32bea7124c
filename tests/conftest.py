from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

import pytest

from timetrack.records.model import TimeRecord
from timetrack.timer.engine import ShiftTimer


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class _ManualTask:
    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose tasks only run when the test says so."""

    def __init__(self):
        self.tasks: list[_ManualTask] = []

    def schedule(self, interval_seconds: float, callback: Callable[[], None]) -> _ManualTask:
        task = _ManualTask(interval_seconds, callback)
        self.tasks.append(task)
        return task

    @property
    def active(self) -> list[_ManualTask]:
        return [t for t in self.tasks if not t.cancelled]

    def run_pending(self) -> None:
        for task in self.active:
            task.callback()


class InMemoryTimeRecords:
    def __init__(self):
        self._records: dict[str, TimeRecord] = {}
        self.fail_with: Optional[Exception] = None

    def add(self, record: TimeRecord) -> TimeRecord:
        if self.fail_with is not None:
            raise self.fail_with
        self._records[record.record_id] = record
        return record

    def get(self, record_id: str) -> Optional[TimeRecord]:
        return self._records.get(record_id)

    def list_for_employee(self, employee_id: str, limit: int):
        items = [r for r in self._records.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.clock_in_time, reverse=True)
        return items[:limit]

    def list_all(self):
        return sorted(self._records.values(), key=lambda r: r.clock_in_time)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_timer(clock, scheduler):
    def _make(*, strict: bool = False) -> ShiftTimer:
        return ShiftTimer(clock=clock, scheduler=scheduler, strict=strict)

    return _make


@pytest.fixture
def records_repo() -> InMemoryTimeRecords:
    return InMemoryTimeRecords()

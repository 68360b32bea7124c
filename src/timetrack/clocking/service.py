from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..common.validators import require_non_empty, require_one_of
from ..core.constants import DEFAULT_BREAK_TYPES
from ..core.enums import TimerStatus
from ..core.exceptions import ValidationError
from ..location.model import Location
from ..location.provider import LocationProvider
from ..location.service import LocationService
from ..records.model import TimeRecord
from ..records.service import RecordService
from ..timer.engine import ShiftTimer
from ..timer.model import ShiftTimerState
from ..timer.summary import format_clock, total_break_seconds

logger = logging.getLogger(__name__)

TimerFactory = Callable[[], ShiftTimer]


@dataclass
class ClockSession:
    """One employee's live shift: the timer plus the location resolved at clock-in."""

    employee_id: str
    timer: ShiftTimer
    employee_name: str = ""
    location: Optional[Location] = None


@dataclass(frozen=True)
class TimerView:
    """What the presentation layer polls once per second."""

    status: TimerStatus
    clock_in_time: Optional[datetime]
    elapsed_work_seconds: int
    break_seconds: int
    current_break: Optional[dict]
    breaks: list[dict] = field(default_factory=list)
    location: Optional[str] = None
    location_error: Optional[str] = None

    @classmethod
    def inactive(cls) -> "TimerView":
        return cls(
            status=TimerStatus.INACTIVE,
            clock_in_time=None,
            elapsed_work_seconds=0,
            break_seconds=0,
            current_break=None,
        )

    def as_dict(self) -> dict:
        return {
            "status": self.status.value,
            "clock_in_time": self.clock_in_time.isoformat() if self.clock_in_time else None,
            "elapsed_work_seconds": self.elapsed_work_seconds,
            "elapsed_display": format_clock(self.elapsed_work_seconds),
            "break_seconds": self.break_seconds,
            "current_break": self.current_break,
            "breaks": self.breaks,
            "location": self.location,
            "location_error": self.location_error,
        }


def _break_dict(entry) -> dict:
    return {
        "type": entry.type,
        "start_time": entry.start_time.isoformat(),
        "end_time": entry.end_time.isoformat() if entry.end_time else None,
        "duration_seconds": entry.duration_seconds,
    }


class ClockService:
    """Use case: clock in/out and breaks for employees, one live session each."""

    def __init__(
        self,
        records: RecordService,
        location_service: LocationService,
        *,
        timer_factory: TimerFactory = ShiftTimer,
        break_types: Iterable[str] = DEFAULT_BREAK_TYPES,
    ):
        self._records = records
        self._location = location_service
        self._timer_factory = timer_factory
        self._break_types = tuple(break_types)
        self._sessions: dict[str, ClockSession] = {}
        self._lock = threading.Lock()

    @property
    def break_types(self) -> tuple[str, ...]:
        return self._break_types

    def clock_in(
        self,
        employee_id: str,
        *,
        employee_name: Optional[str] = None,
        manual_time: Optional[datetime] = None,
        provider: Optional[LocationProvider] = None,
    ) -> TimerView:
        employee_id = require_non_empty(str(employee_id), "employee_id")
        with self._lock:
            session = self._sessions.get(employee_id)
            if session is None:
                session = ClockSession(employee_id=employee_id, timer=self._timer_factory())
                self._sessions[employee_id] = session
            if employee_name:
                session.employee_name = str(employee_name)

        session.timer.start(manual_time)
        logger.info("Employee %s clocked in at %s", employee_id, session.timer.state().start_time)

        # The shift is already counting; a failed lookup only leaves a note.
        session.location = self._location.resolve(provider)
        return self._view(session)

    def start_break(self, employee_id: str, break_type: str) -> TimerView:
        break_type = require_one_of(break_type, self._break_types, "break type")
        session = self._require_session(employee_id)
        session.timer.start_break(break_type)
        logger.info("Employee %s started %s break", employee_id, break_type)
        return self._view(session)

    def end_break(self, employee_id: str) -> TimerView:
        session = self._require_session(employee_id)
        session.timer.end_break()
        logger.info("Employee %s ended break", employee_id)
        return self._view(session)

    def clock_out(self, employee_id: str) -> TimeRecord:
        session = self._require_session(employee_id)
        try:
            snapshot = session.timer.stop()
        finally:
            self.discard(employee_id)

        if snapshot is None:
            raise ValidationError("You are not clocked in")

        location = self._location.address_or_placeholder(session.location)
        return self._records.save_snapshot(
            snapshot,
            employee_id=session.employee_id,
            employee_name=session.employee_name,
            location=location,
        )

    def status(self, employee_id: str) -> TimerView:
        with self._lock:
            session = self._sessions.get(str(employee_id))
        if session is None:
            return TimerView.inactive()
        return self._view(session)

    def discard(self, employee_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(str(employee_id), None)
        if session is not None:
            session.timer.close()

    def shutdown(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.timer.close()
        if sessions:
            logger.info("Discarded %d open clock session(s)", len(sessions))

    def _require_session(self, employee_id: str) -> ClockSession:
        with self._lock:
            session = self._sessions.get(str(employee_id))
        if session is None or not session.timer.is_running:
            raise ValidationError("You are not clocked in")
        return session

    def _view(self, session: ClockSession) -> TimerView:
        state: ShiftTimerState = session.timer.state()
        location = session.location
        return TimerView(
            status=state.status,
            clock_in_time=state.start_time,
            elapsed_work_seconds=state.elapsed_work_seconds,
            break_seconds=total_break_seconds(state.breaks),
            current_break=_break_dict(state.current_break) if state.current_break else None,
            breaks=[_break_dict(b) for b in state.breaks],
            location=location.address if location else None,
            location_error=location.error if location else None,
        )

from __future__ import annotations

import csv
import io
import logging
from typing import Mapping, Optional, Sequence

from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import RecordNotSavedError
from ..timer.model import ShiftSnapshot
from ..timer.summary import format_duration, format_hours
from .model import TimeRecord
from .repository import TimeRecordRepository

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "Employee Name",
    "Employee ID",
    "Clock In",
    "Clock Out",
    "Location",
    "Total Duration (hours)",
    "Break Duration (hours)",
]

_TS_FORMAT = "%Y-%m-%d %H:%M:%S"


class RecordService:
    """Use case: store finished shifts and read them back for history/export."""

    def __init__(self, records: TimeRecordRepository):
        self._records = records

    def save_snapshot(
        self,
        snapshot: ShiftSnapshot,
        *,
        employee_id: str,
        location: str,
        employee_name: str = "",
    ) -> TimeRecord:
        record = TimeRecord.from_snapshot(
            snapshot, employee_id=employee_id, employee_name=employee_name, location=location
        )
        try:
            saved = self._records.add(record)
        except Exception as e:
            logger.exception("Failed to store time record %s for employee %s", record.record_id, employee_id)
            raise RecordNotSavedError(record, e) from e
        logger.info(
            "Stored time record %s for employee %s (%ds worked, %d break(s))",
            saved.record_id,
            employee_id,
            saved.total_work_seconds,
            len(saved.breaks),
        )
        return saved

    def history_for(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[TimeRecord]:
        return self._records.list_for_employee(employee_id, limit)

    def all_records(self) -> Sequence[TimeRecord]:
        return self._records.list_all()

    def history_ui(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        return [self.to_ui(r) for r in self.history_for(employee_id, limit=limit)]

    def export_csv(self, *, employee_names: Optional[Mapping[str, str]] = None) -> str:
        names = employee_names or {}
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writeheader()
        for r in self.all_records():
            writer.writerow(
                {
                    "Employee Name": names.get(r.employee_id) or r.employee_name or "Unknown",
                    "Employee ID": r.employee_id,
                    "Clock In": r.clock_in_time.strftime(_TS_FORMAT),
                    "Clock Out": r.clock_out_time.strftime(_TS_FORMAT) if r.clock_out_time else "Still Active",
                    "Location": r.location,
                    "Total Duration (hours)": format_hours(r.total_work_seconds),
                    "Break Duration (hours)": format_hours(r.total_break_seconds),
                }
            )
        return out.getvalue()

    def to_ui(self, r: TimeRecord) -> dict:
        return {
            "record_id": r.record_id,
            "date": r.clock_in_time.strftime("%Y-%m-%d"),
            "clock_in": r.clock_in_time.strftime("%H:%M"),
            "clock_out": r.clock_out_time.strftime("%H:%M") if r.clock_out_time else "-",
            "location": r.location,
            "work_time": format_duration(r.total_work_seconds),
            "break_time": format_duration(r.total_break_seconds),
            "total_time": format_duration(r.total_shift_seconds),
            "breaks": [
                {
                    "type": b.type,
                    "start": b.start_time.strftime("%H:%M"),
                    "duration": format_duration(b.duration_seconds),
                }
                for b in r.breaks
            ],
        }

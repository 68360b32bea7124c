from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..timer.model import BreakEntry
from .model import TimeRecord
from .repository import TimeRecordRepository

_RECORD_COLUMNS = (
    "record_id, employee_id, employee_name, clock_in_time, clock_out_time, location, total_work_seconds"
)


class MySQLTimeRecordRepository(TimeRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, record: TimeRecord) -> TimeRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_records(
                    record_id, employee_id, employee_name, clock_in_time, clock_out_time, location, total_work_seconds
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.record_id,
                    record.employee_id,
                    record.employee_name,
                    record.clock_in_time,
                    record.clock_out_time,
                    record.location,
                    int(record.total_work_seconds),
                ),
            )
            for position, entry in enumerate(record.breaks):
                cur.execute(
                    """
                    INSERT INTO break_entries(record_id, position, break_type, start_time, end_time, duration_seconds)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.record_id,
                        position,
                        entry.type,
                        entry.start_time,
                        entry.end_time,
                        int(entry.duration_seconds),
                    ),
                )
        return record

    def get(self, record_id: str) -> Optional[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM time_records WHERE record_id=%s",
                (record_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            breaks = self._load_breaks(cur, [record_id])
            return self._to_record(r, breaks.get(record_id, []))

    def list_for_employee(self, employee_id: str, limit: int) -> Sequence[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM time_records
                WHERE employee_id=%s
                ORDER BY clock_in_time DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            rows = fetchall(cur)
            breaks = self._load_breaks(cur, [r["record_id"] for r in rows])
            return [self._to_record(r, breaks.get(r["record_id"], [])) for r in rows]

    def list_all(self) -> Sequence[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_RECORD_COLUMNS} FROM time_records ORDER BY clock_in_time ASC")
            rows = fetchall(cur)
            breaks = self._load_breaks(cur, [r["record_id"] for r in rows])
            return [self._to_record(r, breaks.get(r["record_id"], [])) for r in rows]

    @staticmethod
    def _load_breaks(cur, record_ids: List[str]) -> Dict[str, List[BreakEntry]]:
        if not record_ids:
            return {}
        placeholders = ",".join(["%s"] * len(record_ids))
        cur.execute(
            f"""
            SELECT record_id, break_type, start_time, end_time, duration_seconds
            FROM break_entries
            WHERE record_id IN ({placeholders})
            ORDER BY record_id, position
            """,
            tuple(record_ids),
        )
        out: Dict[str, List[BreakEntry]] = {}
        for r in fetchall(cur):
            out.setdefault(r["record_id"], []).append(
                BreakEntry(
                    type=r["break_type"],
                    start_time=r["start_time"],
                    end_time=r.get("end_time"),
                    duration_seconds=int(r.get("duration_seconds") or 0),
                )
            )
        return out

    @staticmethod
    def _to_record(r: Dict[str, Any], breaks: List[BreakEntry]) -> TimeRecord:
        return TimeRecord(
            record_id=r["record_id"],
            employee_id=r["employee_id"],
            clock_in_time=r["clock_in_time"],
            clock_out_time=r.get("clock_out_time"),
            location=r.get("location") or "",
            total_work_seconds=int(r.get("total_work_seconds") or 0),
            breaks=tuple(breaks),
            employee_name=r.get("employee_name") or "",
        )

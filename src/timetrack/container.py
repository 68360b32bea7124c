from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Optional

from .clocking.service import ClockService
from .common.datetime_utils import Clock, now_local
from .core.constants import DEFAULT_BREAK_TYPES, DEFAULT_LOCATION_PLACEHOLDER, DEFAULT_TICK_SECONDS
from .database.connection import DatabaseConnection, DBConfig
from .location.service import LocationService
from .records.mysql_record_repository import MySQLTimeRecordRepository
from .records.repository import TimeRecordRepository
from .records.service import RecordService
from .timer.engine import ShiftTimer
from .timer.scheduler import Scheduler, ThreadScheduler


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    clock: Clock

    records_repo: TimeRecordRepository

    location_service: LocationService
    record_service: RecordService
    clock_service: ClockService


def build_container(
    *,
    settings,
    records_repo: Optional[TimeRecordRepository] = None,
    scheduler: Optional[Scheduler] = None,
    clock: Optional[Clock] = None,
) -> Container:
    """Wire repositories and services from a settings module.

    ``records_repo``, ``scheduler`` and ``clock`` override the defaults
    (tests pass in-memory fakes).
    """
    conn = None
    if records_repo is None:
        conn = DatabaseConnection(DBConfig.from_mapping(dict(settings.DB_CONFIG)))
        records_repo = MySQLTimeRecordRepository(conn)

    clock = clock or now_local
    scheduler = scheduler or ThreadScheduler()
    timer_factory = partial(
        ShiftTimer,
        clock=clock,
        scheduler=scheduler,
        tick_seconds=float(getattr(settings, "TICK_SECONDS", DEFAULT_TICK_SECONDS)),
        strict=bool(getattr(settings, "STRICT_TIMER", False)),
    )

    location_service = LocationService(
        placeholder=getattr(settings, "LOCATION_PLACEHOLDER", DEFAULT_LOCATION_PLACEHOLDER),
    )
    record_service = RecordService(records_repo)
    clock_service = ClockService(
        record_service,
        location_service,
        timer_factory=timer_factory,
        break_types=getattr(settings, "BREAK_TYPES", DEFAULT_BREAK_TYPES),
    )

    return Container(
        conn=conn,
        clock=clock,
        records_repo=records_repo,
        location_service=location_service,
        record_service=record_service,
        clock_service=clock_service,
    )

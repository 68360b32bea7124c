from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import Clock, now_local, seconds_between
from ..core.constants import DEFAULT_TICK_SECONDS
from ..core.enums import TimerStatus
from ..core.exceptions import InvalidStateTransition
from .model import BreakEntry, ShiftSnapshot, ShiftTimerState
from .scheduler import RepeatingTask, Scheduler, ThreadScheduler

logger = logging.getLogger(__name__)


class ShiftTimer:
    """Stopwatch for one work shift that nets break time out of worked time.

    Worked seconds are always recomputed from the clock (gross time since
    start minus completed and open breaks) instead of being accumulated, so
    a late or skipped tick never introduces drift.

    Misuse (e.g. ending a break that was never started) is ignored by
    default. With ``strict=True`` it raises ``InvalidStateTransition``.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        strict: bool = False,
    ):
        self._clock = clock or now_local
        self._scheduler = scheduler or ThreadScheduler()
        self._tick_seconds = float(tick_seconds)
        self._strict = bool(strict)
        self._lock = threading.RLock()

        self._is_running = False
        self._start_time: Optional[datetime] = None
        self._end_time: Optional[datetime] = None
        self._elapsed = 0
        self._breaks: list[BreakEntry] = []
        self._current_break: Optional[BreakEntry] = None

        self._work_task: Optional[RepeatingTask] = None
        self._break_task: Optional[RepeatingTask] = None

    # ----- Read side -----
    @property
    def status(self) -> TimerStatus:
        with self._lock:
            return self._status_locked()

    @property
    def is_running(self) -> bool:
        return self._is_running

    def state(self) -> ShiftTimerState:
        with self._lock:
            return ShiftTimerState(
                is_running=self._is_running,
                start_time=self._start_time,
                end_time=self._end_time,
                elapsed_work_seconds=self._elapsed,
                breaks=tuple(self._breaks),
                current_break=self._current_break,
            )

    # ----- Operations -----
    def start(self, manual_time: Optional[datetime] = None) -> None:
        """Begin a new shift, optionally back-dated to ``manual_time``."""
        with self._lock:
            if self._is_running:
                self._reject("start a shift", "a shift is already running")
                logger.info("Restarting running shift; %d break(s) discarded", len(self._breaks))
                self._cancel_tasks()

            self._start_time = manual_time or self._clock()
            self._end_time = None
            self._elapsed = 0
            self._breaks = []
            self._current_break = None
            self._is_running = True

            self._work_task = self._scheduler.schedule(self._tick_seconds, self.tick)

    def tick(self) -> None:
        with self._lock:
            if not self._is_running:
                return
            self._elapsed = self._compute_elapsed(self._clock())

    def start_break(self, break_type: str) -> None:
        with self._lock:
            if not self._is_running:
                self._reject("start a break", "no shift is running")
                return
            if self._current_break is not None:
                self._reject("start a break", f"already on {self._current_break.type} break")
                return

            self._current_break = BreakEntry(type=break_type, start_time=self._clock())
            self._break_task = self._scheduler.schedule(self._tick_seconds, self._tick_break)

    def end_break(self) -> None:
        with self._lock:
            if not self._is_running or self._current_break is None:
                self._reject("end a break", "no break is open")
                return

            self._cancel_break_task()
            now = self._clock()
            self._close_current_break(now)
            self._elapsed = self._compute_elapsed(now)

    def stop(self) -> Optional[ShiftSnapshot]:
        """Finish the shift and return its snapshot.

        An open break is closed at the stop instant first so it counts as
        break time. Stopping a timer that is not running returns the last
        snapshot (or None if no shift was ever started).
        """
        with self._lock:
            if not self._is_running:
                self._reject("stop the shift", "no shift is running")
                return self._snapshot_locked()

            self._cancel_tasks()
            end_time = self._clock()
            if self._current_break is not None:
                self._close_current_break(end_time)

            self._elapsed = self._compute_elapsed(end_time)
            self._end_time = end_time
            self._is_running = False
            return self._snapshot_locked()

    def close(self) -> None:
        """Cancel scheduled ticks; used when the owning session is discarded."""
        with self._lock:
            self._cancel_tasks()

    # ----- Internals -----
    def _tick_break(self) -> None:
        with self._lock:
            if self._current_break is None:
                return
            duration = seconds_between(self._current_break.start_time, self._clock())
            self._current_break = self._current_break.with_duration(duration)

    def _close_current_break(self, end_time: datetime) -> None:
        duration = seconds_between(self._current_break.start_time, end_time)
        self._breaks.append(self._current_break.closed_at(end_time, duration))
        self._current_break = None

    def _compute_elapsed(self, now: datetime) -> int:
        if self._start_time is None:
            return 0
        gross = seconds_between(self._start_time, now)
        completed = sum(b.duration_seconds for b in self._breaks)
        open_break = 0
        if self._current_break is not None:
            open_break = max(seconds_between(self._current_break.start_time, now), 0)
        return max(gross - completed - open_break, 0)

    def _snapshot_locked(self) -> Optional[ShiftSnapshot]:
        if self._start_time is None or self._end_time is None:
            return None
        return ShiftSnapshot(
            start_time=self._start_time,
            end_time=self._end_time,
            elapsed_work_seconds=self._elapsed,
            breaks=tuple(self._breaks),
        )

    def _status_locked(self) -> TimerStatus:
        if not self._is_running:
            return TimerStatus.INACTIVE
        if self._current_break is not None:
            return TimerStatus.ON_BREAK
        return TimerStatus.ACTIVE

    def _reject(self, operation: str, reason: str) -> None:
        if self._strict:
            raise InvalidStateTransition(operation, reason)
        logger.debug("Ignoring attempt to %s: %s", operation, reason)

    def _cancel_break_task(self) -> None:
        if self._break_task is not None:
            self._break_task.cancel()
            self._break_task = None

    def _cancel_tasks(self) -> None:
        if self._work_task is not None:
            self._work_task.cancel()
            self._work_task = None
        self._cancel_break_task()

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class RepeatingTask(Protocol):
    def cancel(self) -> None:
        raise NotImplementedError


class Scheduler(Protocol):
    def schedule(self, interval_seconds: float, callback: Callable[[], None]) -> RepeatingTask:
        raise NotImplementedError


class _ThreadTask:
    """Runs ``callback`` every ``interval`` seconds on a chain of daemon timers."""

    def __init__(self, interval: float, callback: Callable[[], None], name: str):
        self._interval = float(interval)
        self._callback = callback
        self._name = name
        self._lock = threading.Lock()
        self._cancelled = False
        self._timer: Optional[threading.Timer] = None

    def start(self) -> "_ThreadTask":
        self._arm()
        return self

    def _arm(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._timer = threading.Timer(self._interval, self._run)
            self._timer.daemon = True
            self._timer.name = self._name
            self._timer.start()

    def _run(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            # Keep ticking; a failed recomputation is retried on the next interval.
            logger.exception("Scheduled task %s failed", self._name)
        self._arm()

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class ThreadScheduler:
    """Default scheduler backed by ``threading.Timer``."""

    def __init__(self, *, name_prefix: str = "timetrack-tick"):
        self._name_prefix = name_prefix
        self._counter = itertools.count(1)

    def schedule(self, interval_seconds: float, callback: Callable[[], None]) -> RepeatingTask:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        name = f"{self._name_prefix}-{next(self._counter)}"
        return _ThreadTask(interval_seconds, callback, name).start()

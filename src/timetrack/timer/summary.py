"""Aggregates derived from timer output (shift summary, status and export views)."""

from __future__ import annotations

from typing import Iterable

from .model import BreakEntry


def total_break_seconds(breaks: Iterable[BreakEntry]) -> int:
    return sum(int(b.duration_seconds) for b in breaks)


def total_shift_seconds(elapsed_work_seconds: int, breaks: Iterable[BreakEntry]) -> int:
    return int(elapsed_work_seconds) + total_break_seconds(breaks)


def format_duration(seconds: int) -> str:
    """``5430`` -> ``"1h 30m"``."""
    seconds = max(int(seconds), 0)
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m"


def format_clock(seconds: int) -> str:
    """``5430`` -> ``"01:30"``."""
    seconds = max(int(seconds), 0)
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}"


def format_hours(seconds: int) -> str:
    """Decimal hours with two places, e.g. ``5400`` -> ``"1.50"``."""
    return f"{max(int(seconds), 0) / 3600:.2f}"

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role stored in the Flask session by the auth layer."""

    ADMIN = "admin"
    STAFF = "staff"


class TimerStatus(str, Enum):
    """Display status of a shift timer."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    ON_BREAK = "break"


class LocationErrorKind(str, Enum):
    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    UNSUPPORTED = "UNSUPPORTED"

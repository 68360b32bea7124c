from __future__ import annotations

from .enums import LocationErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidStateTransition(DomainError):
    """Raised by a strict shift timer when an operation is not allowed in its current state."""

    def __init__(self, operation: str, status: str):
        super().__init__(f"Cannot {operation} while {status}")
        self.operation = operation
        self.status = status


_LOCATION_MESSAGES = {
    LocationErrorKind.PERMISSION_DENIED: "Location access denied. Please enable location services.",
    LocationErrorKind.POSITION_UNAVAILABLE: "Location information is unavailable.",
    LocationErrorKind.TIMEOUT: "The request to get location timed out.",
    LocationErrorKind.UNSUPPORTED: "Geolocation is not supported by this client.",
}


class LocationError(DomainError):
    """Raised by a location provider that cannot produce a position."""

    def __init__(self, kind: LocationErrorKind, message: str | None = None):
        super().__init__(message or _LOCATION_MESSAGES.get(kind, "Failed to get location"))
        self.kind = kind


class RecordNotSavedError(DomainError):
    """Raised when a finished shift could not be persisted.

    The shift is already stopped; ``record`` holds what should have been stored.
    """

    def __init__(self, record, cause: Exception):
        super().__init__(f"Time record {record.record_id} could not be saved: {cause}")
        self.record = record
        self.cause = cause

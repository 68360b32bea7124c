from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..core.enums import LocationErrorKind
from ..core.exceptions import LocationError
from .model import Location


class LocationProvider(Protocol):
    def locate(self) -> Location:
        """Return the current position or raise ``LocationError``."""
        raise NotImplementedError


def format_coordinates(latitude: float, longitude: float) -> str:
    return f"{latitude:.5f}, {longitude:.5f}"


@dataclass(frozen=True)
class CoordinatesProvider:
    """Position reported by the client; the address is the formatted coordinates."""

    latitude: float
    longitude: float

    def locate(self) -> Location:
        lat, lng = float(self.latitude), float(self.longitude)
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
            raise LocationError(LocationErrorKind.POSITION_UNAVAILABLE)
        return Location(latitude=lat, longitude=lng, address=format_coordinates(lat, lng))


@dataclass(frozen=True)
class FailingProvider:
    """Stands in for a client that reported a geolocation error."""

    kind: LocationErrorKind

    def locate(self) -> Location:
        raise LocationError(self.kind)

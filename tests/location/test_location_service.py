from __future__ import annotations

import pytest

from timetrack.core.enums import LocationErrorKind
from timetrack.core.exceptions import LocationError
from timetrack.location.model import Location
from timetrack.location.provider import CoordinatesProvider, FailingProvider
from timetrack.location.service import LocationService


def test_coordinates_are_formatted_as_address():
    location = LocationService().resolve(CoordinatesProvider(21.0277644, 105.8341598))

    assert location.ok
    assert location.address == "21.02776, 105.83416"


def test_out_of_range_coordinates_raise_from_provider():
    with pytest.raises(LocationError) as exc:
        CoordinatesProvider(123.0, 10.0).locate()

    assert exc.value.kind == LocationErrorKind.POSITION_UNAVAILABLE


def test_provider_failure_becomes_error_location():
    location = LocationService().resolve(FailingProvider(LocationErrorKind.PERMISSION_DENIED))

    assert not location.ok
    assert location.address is None
    assert location.error == "Location access denied. Please enable location services."


def test_missing_provider_is_unsupported():
    location = LocationService().resolve(None)

    assert location.error == "Geolocation is not supported by this client."


def test_placeholder_used_without_address():
    service = LocationService(placeholder="Unknown site")

    assert service.address_or_placeholder(None) == "Unknown site"
    assert service.address_or_placeholder(Location(error="timeout")) == "Unknown site"
    assert service.address_or_placeholder(Location(address="HQ")) == "HQ"

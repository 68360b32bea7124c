from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import DEFAULT_LOCATION_PLACEHOLDER
from ..core.enums import LocationErrorKind
from ..core.exceptions import LocationError
from .model import Location
from .provider import LocationProvider

logger = logging.getLogger(__name__)


class LocationService:
    """Resolves a location for a shift without ever failing the shift itself."""

    def __init__(self, *, placeholder: str = DEFAULT_LOCATION_PLACEHOLDER):
        self._placeholder = placeholder

    def resolve(self, provider: Optional[LocationProvider]) -> Location:
        if provider is None:
            return Location(error=str(LocationError(LocationErrorKind.UNSUPPORTED)))
        try:
            return provider.locate()
        except LocationError as e:
            logger.warning("Location lookup failed (%s): %s", e.kind.value, e)
            return Location(error=str(e))

    def address_or_placeholder(self, location: Optional[Location]) -> str:
        if location is None or not location.address:
            return self._placeholder
        return location.address

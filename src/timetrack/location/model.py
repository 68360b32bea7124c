from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Location:
    """Result of a location lookup; ``error`` is set instead of raising."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.address is not None

from abc import ABC, abstractmethod
from typing import Optional
import logging

from ireporter.models.report import Location

logger = logging.getLogger(__name__)


class GeolocationProvider(ABC):
    """
    Abstract source of the user's current position.

    Contract:
    - Output: Location or None when the position is unavailable
    - MUST NEVER raise upstream exceptions
    - Network-backed implementations should enforce a timeout <= 3 seconds
    """

    name: str = "base"

    @abstractmethod
    def current_location(self) -> Optional[Location]:
        raise NotImplementedError


class NoOpProvider(GeolocationProvider):
    """Geolocation unsupported; the user types coordinates by hand."""

    name = "none"

    def current_location(self) -> Optional[Location]:
        return None


class StaticProvider(GeolocationProvider):
    """Fixed coordinates, e.g. a kiosk at a known address."""

    name = "static"

    def __init__(self, latitude: float, longitude: float):
        self.location = Location(latitude=latitude, longitude=longitude)

    def current_location(self) -> Optional[Location]:
        return self.location

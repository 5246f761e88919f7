import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from ireporter.models.report import Location
from .base import GeolocationProvider

logger = logging.getLogger(__name__)


class IPGeolocationProvider(GeolocationProvider):
    """
    Approximate position from the public IP address (ip-api.com format).

    - No API key required.
    - Uses a strict timeout (<= 3 seconds).
    - Never raises upstream exceptions; returns None on failure.
    """

    name = "ip"

    def __init__(self, url: str = "http://ip-api.com/json", timeout: float = 3.0, session: Any = None):
        self.url = url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def current_location(self) -> Optional[Location]:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
            if resp.status_code != 200:
                logger.warning(f"IP geolocation failed with status {resp.status_code}")
                return None

            data: Dict[str, Any] = resp.json()
            if data.get("status") not in (None, "success"):
                logger.warning(f"IP geolocation refused: {data.get('message')}")
                return None

            latitude = data.get("lat", data.get("latitude"))
            longitude = data.get("lon", data.get("longitude"))
            if latitude is None or longitude is None:
                return None
            return Location(latitude=latitude, longitude=longitude)
        except (requests.RequestException, ValueError, ValidationError) as e:
            logger.warning(f"IP geolocation error: {e}")
            return None

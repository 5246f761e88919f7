import logging
from typing import Optional

from ireporter.core.settings import settings
from .base import GeolocationProvider, NoOpProvider, StaticProvider
from .ip_provider import IPGeolocationProvider

logger = logging.getLogger(__name__)

_provider_instance: Optional[GeolocationProvider] = None


def build_geolocation_provider() -> GeolocationProvider:
    """
    Pick a provider from settings.

    Rules:
    - "static" needs both GEOLOCATION_STATIC_LATITUDE and _LONGITUDE,
      otherwise falls back to the no-op provider
    - "ip" queries GEOLOCATION_IP_URL
    - anything else: no-op (manual entry only)
    """
    provider_name = (settings.GEOLOCATION_PROVIDER or "none").lower()

    if provider_name == "static":
        latitude = settings.GEOLOCATION_STATIC_LATITUDE
        longitude = settings.GEOLOCATION_STATIC_LONGITUDE
        if latitude is not None and longitude is not None:
            return StaticProvider(latitude, longitude)
        logger.warning("Static geolocation selected without coordinates; falling back to manual entry")
        return NoOpProvider()

    if provider_name == "ip":
        return IPGeolocationProvider(url=settings.GEOLOCATION_IP_URL)

    return NoOpProvider()


def get_geolocation_provider() -> GeolocationProvider:
    """Resolve and cache the active geolocation provider."""
    global _provider_instance
    if _provider_instance is None:
        _provider_instance = build_geolocation_provider()
        logger.info(f"Geolocation provider initialized: {_provider_instance.name}")
    return _provider_instance

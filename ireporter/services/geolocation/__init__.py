"""
Geolocation providers for the report form.

A missing or failed position is never fatal: the form stays submittable
without coordinates.
"""

from ireporter.services.geolocation.base import GeolocationProvider, NoOpProvider, StaticProvider
from ireporter.services.geolocation.ip_provider import IPGeolocationProvider
from ireporter.services.geolocation.resolver import build_geolocation_provider, get_geolocation_provider

__all__ = [
    "GeolocationProvider",
    "NoOpProvider",
    "StaticProvider",
    "IPGeolocationProvider",
    "build_geolocation_provider",
    "get_geolocation_provider",
]

"""
Core settings and environment variables for the iReporter client.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "iReporter"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Report Service (remote authority)
    REPORT_SERVICE_URL: str = "http://localhost:3000"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Reject administrator status changes that are not edges of the lifecycle graph.
    # Set to false to offer every non-draft status from any status.
    STRICT_ADMIN_TRANSITIONS: bool = True

    # CORS for the local Report Service
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173"

    # Local Report Service: emails registered here get administrator rights
    ADMIN_EMAILS: str = ""

    # Geolocation
    # - GEOLOCATION_PROVIDER: "none" (default), "static" or "ip"
    # - static uses GEOLOCATION_STATIC_LATITUDE / GEOLOCATION_STATIC_LONGITUDE
    GEOLOCATION_PROVIDER: str = "none"
    GEOLOCATION_STATIC_LATITUDE: Optional[float] = None
    GEOLOCATION_STATIC_LONGITUDE: Optional[float] = None
    GEOLOCATION_IP_URL: str = "http://ip-api.com/json"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


# Global settings instance
settings = Settings()

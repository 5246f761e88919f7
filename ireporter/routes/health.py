"""
Health check endpoints.
Used for monitoring and basic connectivity tests.
"""

from fastapi import APIRouter
from ireporter.core.settings import settings
from ireporter.services.report_repository import get_report_repository
from datetime import datetime, timezone


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "reports": len(get_report_repository().list_all()),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

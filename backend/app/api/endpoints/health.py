"""
Ann Investment Portal - Health Check Endpoints
"""
import logging
from fastapi import APIRouter
from datetime import datetime, timezone

from core.config import settings
from db.session import ping_db
from services.media import media_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def health_check():
    """Liveness"""
    return {"status": "ok"}


@router.get("/detailed")
async def detailed_health_check():
    """Detailed health check with dependency statuses"""
    results = {
        "status": "ok",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {}
    }

    # Check database
    try:
        await ping_db()
        results["services"]["database"] = {"status": "ok"}
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        results["services"]["database"] = {"status": "unhealthy"}
        results["status"] = "degraded"

    # Image storage credentials (no remote call)
    results["services"]["media_storage"] = {
        "status": "ok" if media_storage.is_configured else "not_configured"
    }

    return results

"""
Health check and monitoring endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.config import SERVICE_NAME, SERVICE_VERSION, config
from app.logging_config import logger
from app.scheduler import SchedulingEngine, get_engine

router = APIRouter(prefix="/api", tags=["Health & Monitoring"])


# GET /api/health
# Gets: nothing
# Returns: {status, timestamp, environment, slots}
# Example:
#   curl http://localhost:8000/api/health
@router.get("/health")
async def health_check(engine: SchedulingEngine = Depends(get_engine)):
    """
    Basic health check - returns 200 if the service is running.
    Also reports whether the slot calendar has been seeded.
    """
    summary = engine.slot_summary()
    if summary["total"] == 0:
        logger.warning("health_check_no_slots")
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config.ENVIRONMENT,
        "slots": "initialized" if summary["total"] else "empty",
    }


# GET /api/health/info
# Gets: nothing
# Returns: service configuration summary and slot counts
# Example:
#   curl http://localhost:8000/api/health/info
@router.get("/health/info")
async def system_info(engine: SchedulingEngine = Depends(get_engine)):
    """
    System information and configuration status.
    """
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "configuration": {
            "environment": config.ENVIRONMENT,
            "horizon_days": config.SLOT_HORIZON_DAYS,
            "business_timezone": config.BUSINESS_TIMEZONE or None,
            "email_configured": config.has_email_config(),
            "admin_key_configured": bool(config.API_KEY),
            "debug_mode": config.DEBUG,
        },
        "slots": engine.slot_summary(),
    }

"""Admin guard: meeting listing and lookup require the shared X-API-Key."""

import secrets

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from app.config import config
from app.logging_config import get_logger

logger = get_logger(__name__)

admin_key_header = APIKeyHeader(name="X-API-Key", auto_error=False, description="Admin API key")

OPEN_ACCESS = "open"


def admin_key_matches(provided, expected: str) -> bool:
    if not provided:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


async def require_admin_key(api_key: str = Security(admin_key_header)) -> str:
    """Admin endpoints stay open while API_KEY is unset (local development)."""
    if not config.API_KEY:
        return OPEN_ACCESS

    if not admin_key_matches(api_key, config.API_KEY):
        logger.warning("admin_access_denied", key_supplied=bool(api_key))
        raise HTTPException(status_code=403, detail="Admin access required")

    return "admin"

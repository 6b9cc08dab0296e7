"""Health check endpoints."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from galamint import __version__
from galamint.config import get_settings
from galamint.records.database import ping_db

logger = logging.getLogger(__name__)

router = APIRouter()


async def _database_status() -> str:
    try:
        await ping_db()
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database ping failed: {e}")
        return "down"
    return "up"


@router.get("/health")
async def health_check():
    """Report whether the record store answers; 503 when it does not."""
    database = await _database_status()
    if database != "up":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "info": {"database": {"status": database}}},
        )
    return {"status": "ok", "info": {"database": {"status": database}}}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration info."""
    settings = get_settings()
    database = await _database_status()
    return {
        "status": "ok" if database == "up" else "error",
        "service": "galamint",
        "version": __version__,
        "info": {"database": {"status": database}},
        "config": settings.get_safe_dict(),
    }

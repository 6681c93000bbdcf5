"""Liveness, readiness and database probes."""

import asyncio
import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config import get_settings
from infrastructure.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

_DB_TIMEOUT_SECONDS = 5.0
_REDIS_TIMEOUT_SECONDS = 2.0


async def _database_status(db: AsyncSession) -> str:
    """Run a trivial query; return "connected" or a short error label."""
    try:
        await asyncio.wait_for(db.execute(text("SELECT 1")), timeout=_DB_TIMEOUT_SECONDS)
    except TimeoutError:
        logger.error("Database probe timed out after %.0fs", _DB_TIMEOUT_SECONDS)
        return "error: database timeout"
    except Exception as e:
        logger.error("Database probe failed: %s", e)
        return "error: database check failed"
    return "connected"


async def _rate_limit_storage_status() -> str:
    """Ping Redis when it backs the rate limiter; in-memory storage needs no check."""
    if not settings.rate_limit_storage_uri.startswith("redis"):
        return "memory"

    import redis.asyncio as aioredis

    client = aioredis.from_url(settings.rate_limit_storage_uri)
    try:
        await asyncio.wait_for(client.ping(), timeout=_REDIS_TIMEOUT_SECONDS)
    except Exception as e:
        logger.warning("Redis probe failed: %s", e)
        return "degraded"
    finally:
        await client.aclose()
    return "ok"


def _app_info() -> dict:
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health")
async def health_check():
    """Static health information, including the recovery window in force."""
    return {
        "status": "healthy",
        **_app_info(),
        "recovery_window_hours": settings.recovery_window_hours,
    }


@router.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    db_status = await _database_status(db)
    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        **_app_info(),
        "database": db_status,
    }


@router.get("/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Ready once the database answers; a missing Redis only degrades rate limiting."""
    db_ok = await _database_status(db) == "connected"
    return {
        "ready": db_ok,
        "database": "ok" if db_ok else "unavailable",
        "rate_limit_storage": await _rate_limit_storage_status(),
    }


@router.get("/health/live")
async def liveness_check():
    return {"alive": True}

"""Liveness, readiness and version probes."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Response
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from garage.config import get_settings
from garage.database import get_session
from garage.lessons.chapters import CHAPTERS
from garage.redis_client import get_redis

logger = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(
    response: Response,
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict[str, Any]:
    """
    Database is required; Redis only feeds the rate limiter.

    503 ``not_ready`` without the database, 200 ``degraded`` without Redis.
    """
    checks: dict[str, str] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as exc:
        logger.warning("readiness_database_failed", error=str(exc))
        checks["database"] = "error"

    try:
        await get_redis().ping()
        checks["redis"] = "ok"
    except (RuntimeError, RedisError) as exc:
        checks["redis"] = f"unavailable: {exc}"

    if checks["database"] != "ok":
        response.status_code = 503
        status = "not_ready"
    elif checks["redis"] != "ok":
        status = "degraded"
    else:
        status = "ready"
    return {"status": status, "checks": checks}


@router.get("/version")
async def version() -> dict[str, Any]:
    settings = get_settings()
    return {
        "version": settings.app_version,
        "environment": settings.environment,
        "submission_mode": settings.submission_mode,
        "chapters": len(CHAPTERS),
    }

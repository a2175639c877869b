"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from garage.config import get_settings
from garage.database import close_db, init_db
from garage.health.router import router as health_router
from garage.lessons.router import router as lessons_router
from garage.middleware import setup_middleware
from garage.redis_client import close_redis, init_redis
from garage.submissions.router import router as submissions_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)
    logger.info("startup", environment=settings.environment, submission_mode=settings.submission_mode)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Sui Garage API",
        description="Lessons and challenge submissions for the Sui Garage learning platform",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(lessons_router)
    app.include_router(submissions_router)

    return app


app = create_app()

"""FastAPI application entrypoint — lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis

from biocal.config import StorageBackend, get_settings
from biocal.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from biocal.routes import calendar, data, journal, profile
from biocal.services.storage_service import MemoryKeyValueStore

logger = logging.getLogger("biocal")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Open the configured key-value store (Redis is pinged before use)

    Shutdown:
      1. Close the Redis connection pool
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "biocal starting",
        extra={
            "log_level": settings.log_level,
            "storage_backend": settings.storage_backend.value,
        },
    )

    redis: Redis | None = None
    try:
        if settings.storage_backend == StorageBackend.redis:
            redis = Redis.from_url(settings.redis_url, decode_responses=True)
            await redis.ping()
            app.state.store = redis
        else:
            app.state.store = MemoryKeyValueStore()
    except Exception as exc:
        logger.exception("startup failure", extra={"error": str(exc)})
        if redis is not None:
            await redis.aclose()
        raise

    yield

    logger.info("biocal shutting down")
    if redis is not None:
        await redis.aclose()


app = FastAPI(
    title="Biodynamic Calendar API",
    description=(
        "Deterministic biodynamic gardening calendar (moon phase, day type, "
        "seasonal mode and task recommendations) from a gardener profile, "
        "with a garden journal and JSON export/import."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "biocal",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(profile.router, prefix="/api/v1")
app.include_router(calendar.router, prefix="/api/v1")
app.include_router(journal.router, prefix="/api/v1")
app.include_router(data.router, prefix="/api/v1")

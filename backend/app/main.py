"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

import redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.middleware.gzip import GZipMiddleware
from sqlalchemy import text

from fastapi.staticfiles import StaticFiles

from app.config import get_settings
from app.errors import register_exception_handlers
from app.models.base import engine, AsyncSessionLocal, Base
from app.models.user import User  # noqa: F401
from app.models.link import Link  # noqa: F401
from app.models.user_session import UserSession  # noqa: F401
from app.api import router as api_router
from app.routes.web import router as web_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting %s...", settings.app_name)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")
    yield
    logger.info("Shutting down...")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Link-in-bio profiles with an ordered list of links",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(GZipMiddleware, minimum_size=500)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routers
app.include_router(api_router)

# Uploaded profile images
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}


async def check_database() -> dict:
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        return {"ok": False, "message": str(e)}
    return {"ok": True}


def check_redis() -> dict:
    try:
        redis.from_url(settings.redis_url, socket_timeout=5).ping()
    except Exception as e:
        return {"ok": False, "message": str(e)}
    return {"ok": True}


def check_celery_workers() -> dict:
    from app.tasks.celery_app import celery_app

    try:
        workers = celery_app.control.inspect(timeout=5).ping() or {}
    except Exception as e:
        return {"ok": False, "message": str(e)}
    return {"ok": bool(workers), "workers": sorted(workers)}


@app.get("/health/detailed")
async def detailed_health_check():
    # Redis and Celery clients block, so they run off the event loop
    checks = {
        "database": await check_database(),
        "redis": await run_in_threadpool(check_redis),
        "celery_workers": await run_in_threadpool(check_celery_workers),
    }
    healthy = all(check["ok"] for check in checks.values())
    return {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }


# Public profile pages catch single-segment paths, so they go last
app.include_router(web_router)

"""Liveness, health and server statistics."""

import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from database.db import get_session, ping_db
from database.models import User
from handlers.dependencies import get_caches, get_server_stats
from middleware.auth import get_current_user
from utils.cache import CacheRegistry
from utils.logger import logger

API_VERSION = "2.0.0"

router = APIRouter(tags=["health"])


@router.get("/test")
async def api_test() -> dict:
    return {"message": "API is working"}


@router.get("/health")
async def health(
    session: AsyncSession = Depends(get_session),
    server_stats: dict = Depends(get_server_stats),
):
    """Database round-trip plus uptime."""
    try:
        db_time = await ping_db(session)
    except Exception as e:
        server_stats["errors"] += 1
        logger.error(f"Health check failed: {e}")
        return JSONResponse(status_code=500, content={"status": "error", "message": str(e)})

    return {
        "status": "ok",
        "time": db_time,
        "version": API_VERSION,
        "uptime": int(time.monotonic() - server_stats["started"]),
    }


@router.get("/stats")
async def stats(
    user: User = Depends(get_current_user),
    caches: CacheRegistry = Depends(get_caches),
    server_stats: dict = Depends(get_server_stats),
) -> dict:
    """Request/error counters and per-category cache stats."""
    return {
        "uptime": int(time.monotonic() - server_stats["started"]),
        "requests": server_stats["requests"],
        "errors": server_stats["errors"],
        "cache": caches.stats(),
    }

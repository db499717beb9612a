"""API entry point."""

import subprocess
import time
from contextlib import asynccontextmanager

import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from config import settings
from database.db import init_db, close_db
from handlers import advice, devices, habits, health, quotations, users
from middleware.rate_limit import api_limiter
from scheduler import tasks
from services.advice import AdviceService
from services.exceptions import AdviceUnavailableError
from services.gemini import get_gemini_client
from utils.cache import CacheRegistry
from utils.logger import logger


# Global scheduler instance
scheduler = AsyncIOScheduler()


def run_migrations() -> None:
    """Apply alembic migrations; failures are logged, not fatal."""
    try:
        result = subprocess.run(
            ["alembic", "upgrade", "head"],
            capture_output=True, text=True, timeout=60
        )
        if result.returncode == 0:
            logger.info("Alembic migrations applied successfully")
        else:
            logger.error(f"Alembic migration failed: {result.stderr}")
    except Exception as e:
        logger.error(f"Failed to run alembic migrations: {e}")


def start_scheduler(caches: CacheRegistry) -> None:
    scheduler.add_job(
        tasks.log_cache_stats,
        trigger='interval',
        minutes=settings.cache_stats_interval_minutes,
        args=[caches],
        id='log_cache_stats',
        replace_existing=True
    )

    scheduler.add_job(
        tasks.scheduler_heartbeat,
        trigger='interval',
        minutes=30,
        id='scheduler_heartbeat',
        replace_existing=True
    )

    tasks.check_heartbeat()

    scheduler.start()
    logger.info("Scheduler started with 2 tasks")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: migrations, tables, caches, advice service, scheduler."""
    logger.info("API starting...")

    run_migrations()
    await init_db()

    caches = CacheRegistry.from_settings(settings)
    app.state.caches = caches
    app.state.advice = AdviceService(get_gemini_client(), caches)

    start_scheduler(caches)
    logger.info(f"API ready on port {settings.port}")

    yield

    logger.info("API shutting down...")

    scheduler.shutdown(wait=True)
    logger.info("Scheduler stopped")

    await close_db()

    logger.info("API stopped")


def _error(status_code: int, message: str, headers: dict | None = None, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return _error(422, "Validation failed", details=details)

    @app.exception_handler(AdviceUnavailableError)
    async def advice_unavailable(request: Request, exc: AdviceUnavailableError) -> JSONResponse:
        request.app.state.server_stats["errors"] += 1
        return _error(503, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        request.app.state.server_stats["errors"] += 1
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return _error(500, "Internal server error")


def create_app() -> FastAPI:
    app = FastAPI(title="StaticFund Energy API", version=health.API_VERSION, lifespan=lifespan)
    app.state.server_stats = {"started": time.monotonic(), "requests": 0, "errors": 0}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        request.app.state.server_stats["requests"] += 1
        return await call_next(request)

    register_exception_handlers(app)

    api = APIRouter(prefix="/api", dependencies=[Depends(api_limiter)])
    api.include_router(health.router)
    api.include_router(users.router)
    api.include_router(devices.router)
    api.include_router(habits.router)
    api.include_router(advice.router)
    api.include_router(quotations.router)
    app.include_router(api)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

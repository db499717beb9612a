"""Shared FastAPI dependencies for handlers."""

from fastapi import Request

from services.advice import AdviceService
from utils.cache import CacheRegistry


def get_advice_service(request: Request) -> AdviceService:
    """The orchestrator built at startup (see app.lifespan)."""
    return request.app.state.advice


def get_caches(request: Request) -> CacheRegistry:
    return request.app.state.caches


def get_server_stats(request: Request) -> dict:
    return request.app.state.server_stats

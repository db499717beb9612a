"""In-process sliding-window rate limits keyed by client IP."""

import threading
import time
from collections import defaultdict, deque
from collections.abc import Callable

from fastapi import HTTPException, Request, status

from config import settings
from utils.logger import logger


class RateLimitExceededError(HTTPException):
    """429 with the limiter's message and a Retry-After header."""

    def __init__(self, message: str, retry_after: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=message,
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


class RateLimiter:
    """
    Allow at most ``max_requests`` per client within ``window_seconds``.

    Instances are FastAPI dependencies: ``Depends(ai_limiter)``.
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: float,
        message: str,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()
        self._last_prune = clock()

    def check(self, client_id: str) -> None:
        """
        Record a request for ``client_id``.

        Raises:
            RateLimitExceededError: limit reached within the window
        """
        with self._lock:
            now = self._clock()
            if now - self._last_prune >= self.window_seconds:
                self._prune(now)
                self._last_prune = now
            hits = self._hits[client_id]
            while hits and now - hits[0] >= self.window_seconds:
                hits.popleft()

            if len(hits) >= self.max_requests:
                retry_after = max(1, int(self.window_seconds - (now - hits[0])) + 1)
                logger.warning(f"Rate limit '{self.name}' exceeded for {client_id}")
                raise RateLimitExceededError(self.message, retry_after)

            hits.append(now)

    def _prune(self, now: float) -> None:
        """Drop clients with no hits left in the window."""
        idle = [c for c, hits in self._hits.items() if not hits or now - hits[-1] >= self.window_seconds]
        for client_id in idle:
            del self._hits[client_id]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

    async def __call__(self, request: Request) -> None:
        client_id = request.client.host if request.client else "unknown"
        self.check(client_id)


api_limiter = RateLimiter(
    "api",
    max_requests=settings.api_rate_limit,
    window_seconds=60,
    message="Too many requests, please try again later",
)

login_limiter = RateLimiter(
    "login",
    max_requests=settings.login_rate_limit,
    window_seconds=15 * 60,
    message="Too many login attempts, please try again in 15 minutes",
)

register_limiter = RateLimiter(
    "register",
    max_requests=settings.register_rate_limit,
    window_seconds=60 * 60,
    message="Too many registration attempts, please try again later",
)

ai_limiter = RateLimiter(
    "ai",
    max_requests=settings.ai_rate_limit,
    window_seconds=60,
    message="AI request limit reached, please wait a moment",
)

ALL_LIMITERS = (api_limiter, login_limiter, register_limiter, ai_limiter)

"""Pytest fixtures for energy API tests."""

import os

os.environ.setdefault("DB_PASSWORD", "test")

import pytest
from unittest.mock import AsyncMock, MagicMock

from database.models import User
from middleware.rate_limit import ALL_LIMITERS
from utils.cache import CacheRegistry, LRUCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAI:
    """
    Stand-in for GeminiClient.

    Returns queued responses in order; an Exception instance in the queue is
    raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    async def generate(self, prompt, image=None):
        self.calls.append((prompt, image))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def mock_session():
    """Create a mock async session."""
    session = AsyncMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)
    session.add = MagicMock()
    return session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def caches(clock):
    """Small per-category caches driven by the fake clock."""
    return CacheRegistry(
        tips=LRUCache(capacity=5, ttl=3600, clock=clock),
        habits=LRUCache(capacity=5, ttl=86400, clock=clock),
        completeness=LRUCache(capacity=5, ttl=1800, clock=clock),
        solar=LRUCache(capacity=5, ttl=3600, clock=clock),
    )


@pytest.fixture
def sample_devices():
    return [
        {"name": "Geyser", "watts": 3000, "hours_per_day": 2},
        {"name": "Fridge", "watts": 150, "hours_per_day": 24},
        {"name": "LED Light", "watts": 10, "hours_per_day": 5},
    ]


@pytest.fixture
def sample_user():
    """Create a sample user."""
    user = MagicMock(spec=User)
    user.id = 1
    user.email = "thandi@example.co.za"
    user.password = "hashed"
    user.name = "Thandi"
    user.province = "Gauteng"
    user.city = "Johannesburg"
    user.monthly_spend = 1500
    user.monthly_budget = 1200
    user.household_size = "3-4"
    user.property_type = "house"
    user.has_pool = False
    user.cooking_fuel = "electric"
    user.work_from_home = "partial"
    user.latitude = None
    user.longitude = None
    user.onboarding_completed = True
    return user


@pytest.fixture(autouse=True)
def reset_rate_limits():
    for limiter in ALL_LIMITERS:
        limiter.reset()
    yield
    for limiter in ALL_LIMITERS:
        limiter.reset()

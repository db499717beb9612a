"""Bounded in-memory LRU cache with TTL expiry for AI advice responses."""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass
class CacheEntry:
    """Cached payload and the monotonic time after which it is stale."""

    value: Any
    expires_at: float


class LRUCache:
    """
    LRU cache with a fixed capacity and per-entry TTL.

    Entries are kept in use order: the first entry of the OrderedDict is the
    least recently used one. Expired entries are only dropped lazily on get().
    """

    def __init__(
        self,
        capacity: int = 100,
        ttl: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize cache.

        Args:
            capacity: Maximum number of stored entries
            ttl: Time-to-live in seconds (default: 1 hour)
            clock: Time source, monotonic seconds
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """
        Get value by key and mark it most recently used.

        Args:
            key: Cache key

        Returns:
            Cached value or None if missing/expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._clock() > entry.expires_at:
                del self._entries[key]
                return None

            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """
        Insert or replace a value with a fresh TTL.

        A new key evicts the least recently used entry when the cache is full.
        Replacing an existing key never evicts.

        Args:
            key: Cache key
            value: Value to cache
        """
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self.capacity:
                self._entries.popitem(last=False)

            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + self.ttl)

    def invalidate(self, key: str) -> None:
        """Remove key from cache."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        """Number of stored entries, expired-but-unpurged ones included."""
        with self._lock:
            return len(self._entries)

    def stats(self) -> dict[str, int]:
        """
        Count valid and expired entries without purging anything.

        Returns:
            {"valid": ..., "expired": ..., "total": ...}
        """
        with self._lock:
            now = self._clock()
            expired = sum(1 for entry in self._entries.values() if now > entry.expires_at)
            total = len(self._entries)
        return {"valid": total - expired, "expired": expired, "total": total}


# ============== KEY DERIVATION ==============

KEY_PREFIX = "devices_"
FIELD_SEPARATOR = "|"


def _device_field(device: Any, *names: str) -> Any:
    """Read the first present attribute/key of a device dict or ORM row."""
    for name in names:
        if isinstance(device, Mapping):
            if name in device:
                return device[name]
        elif hasattr(device, name):
            return getattr(device, name)
    return None


def _format_number(value: Any) -> str:
    """Render 100.0 and 100 the same way so JSON ints and floats share keys."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _device_signature(device: Any) -> str:
    name = _device_field(device, "name")
    watts = _device_field(device, "watts")
    hours = _device_field(device, "hours_per_day", "hoursPerDay") or 0
    return f"{name}:{_format_number(watts)}:{_format_number(hours)}"


def _rolling_hash(text: str) -> int:
    """32-bit signed polynomial hash (h * 31 + c)."""
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def derive_key(devices: Iterable[Any]) -> str:
    """
    Build an order-independent cache key for a device list.

    Each device contributes "name:watts:hours_per_day"; the strings are
    sorted before hashing, so permutations of a list share a key.
    """
    signatures = sorted(_device_signature(device) for device in devices)
    return f"{KEY_PREFIX}{_rolling_hash(FIELD_SEPARATOR.join(signatures))}"


# ============== PER-CATEGORY INSTANCES ==============

class CacheRegistry:
    """One LRUCache per cached advice category, created at startup."""

    def __init__(
        self,
        tips: LRUCache,
        habits: LRUCache,
        completeness: LRUCache,
        solar: LRUCache,
    ):
        self.tips = tips
        self.habits = habits
        self.completeness = completeness
        self.solar = solar

    @classmethod
    def from_settings(cls, settings) -> "CacheRegistry":
        return cls(
            tips=LRUCache(settings.tips_cache_size, settings.tips_cache_ttl),
            habits=LRUCache(settings.habits_cache_size, settings.habits_cache_ttl),
            completeness=LRUCache(settings.completeness_cache_size, settings.completeness_cache_ttl),
            solar=LRUCache(settings.solar_cache_size, settings.solar_cache_ttl),
        )

    def categories(self) -> dict[str, LRUCache]:
        return {
            "tips": self.tips,
            "habits": self.habits,
            "completeness": self.completeness,
            "solar": self.solar,
        }

    def stats(self) -> dict[str, dict[str, int]]:
        return {name: cache.stats() for name, cache in self.categories().items()}

    def clear(self) -> None:
        for cache in self.categories().values():
            cache.clear()

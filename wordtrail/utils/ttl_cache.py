"""Expiring key-value cache for document analysis results."""

import time
from collections import OrderedDict
from collections.abc import Callable
from threading import RLock
from typing import Any, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """Size-bounded cache whose entries expire after a fixed time-to-live.

    The cache is advisory: a miss only means the caller has to recompute,
    so expired or evicted entries are dropped silently.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_size: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Time-to-live of each entry in seconds
            max_size: Maximum number of entries; the least recently used is evicted
            clock: Monotonic time source, replaceable in tests
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self._cache: OrderedDict[K, tuple[V, float]] = OrderedDict()
        self._ttl_seconds = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._lock = RLock()
        self._hit_count = 0
        self._miss_count = 0

    def _is_expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at > self._ttl_seconds

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the cached value, or ``default`` when missing or expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._miss_count += 1
                return default

            value, stored_at = entry
            if self._is_expired(stored_at, self._clock()):
                del self._cache[key]
                self._miss_count += 1
                return default

            self._cache.move_to_end(key)
            self._hit_count += 1
            return value

    def has(self, key: K) -> bool:
        """Check for a live entry without touching hit/miss counters."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False
            if self._is_expired(entry[1], self._clock()):
                del self._cache[key]
                return False
            return True

    def set(self, key: K, value: V) -> None:
        """Store a value, evicting the least recently used entry when full."""
        with self._lock:
            if key in self._cache:
                self._cache[key] = (value, self._clock())
                self._cache.move_to_end(key)
                return

            while len(self._cache) >= self._max_size:
                self._cache.popitem(last=False)

            self._cache[key] = (value, self._clock())

    def delete(self, key: K) -> bool:
        """Delete key from cache; True if it existed."""
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    def clear(self) -> None:
        """Clear all cached items."""
        with self._lock:
            self._cache.clear()

    def cleanup_expired(self) -> int:
        """
        Remove expired entries.

        Returns:
            Number of expired entries removed
        """
        with self._lock:
            now = self._clock()
            expired_keys = [
                key
                for key, (_, stored_at) in self._cache.items()
                if self._is_expired(stored_at, now)
            ]
            for key in expired_keys:
                del self._cache[key]
            return len(expired_keys)

    def size(self) -> int:
        with self._lock:
            return len(self._cache)

    def __len__(self) -> int:
        return self.size()

    def keys(self) -> list[K]:
        with self._lock:
            return list(self._cache.keys())

    def get_stats(self) -> dict[str, Any]:
        """Cache size and hit ratio"""
        with self._lock:
            total_requests = self._hit_count + self._miss_count
            return {
                "size": len(self._cache),
                "max_size": self._max_size,
                "ttl_seconds": self._ttl_seconds,
                "hits": self._hit_count,
                "misses": self._miss_count,
                "hit_ratio": self._hit_count / total_requests if total_requests else 0.0,
            }

"""Thread-safe in-memory result cache with TTL.

Entries are invalidated lazily: an entry older than the TTL is treated
as absent on read and dropped at that moment. There is no background
sweeper and no persistence; the cache lives as long as its owner.

Concurrent writes for the same key are last-writer-wins.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

from ...domain.models import CacheEntry, SearchResult


def normalize_key(key: str) -> str:
    """Normalize raw query text into a cache key."""
    return key.strip().lower()


@dataclass
class InMemoryResultCache:
    """Thread-safe in-memory cache of ranked result lists.

    This cache implements the ResultCachePort protocol.

    Attributes:
        ttl_seconds: Maximum age of an entry that may still be served
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name for logging
        clock: Monotonic time source, injectable for tests

    Example:
        cache = InMemoryResultCache(ttl_seconds=300)
        cache.put("Oslo ", results)
        cache.get("oslo")  # -> results
    """

    ttl_seconds: float = 300.0
    max_size: Optional[int] = None
    name: str = "search"
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    _store: Dict[str, CacheEntry] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def get(self, key: str) -> Optional[Sequence[SearchResult]]:
        """Get cached results for a query.

        Args:
            key: The raw query text.

        Returns:
            The cached results, or None if not found or expired.
        """
        normalized = normalize_key(key)
        with self._lock:
            entry = self._store.get(normalized)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(self.clock(), self.ttl_seconds):
                del self._store[normalized]
                self._logger.debug("Cache entry expired", extra={"key": normalized})
                self._misses += 1
                return None

            self._hits += 1
            return entry.results

    def put(self, key: str, results: Sequence[SearchResult]) -> None:
        """Store results for a query.

        Args:
            key: The raw query text.
            results: The ranked results to cache.
        """
        normalized = normalize_key(key)
        with self._lock:
            # Simple FIFO eviction
            if self.max_size is not None and len(self._store) >= self.max_size:
                if normalized not in self._store:
                    oldest_key = next(iter(self._store))
                    del self._store[oldest_key]
                    self._logger.debug(
                        "Cache evicted entry",
                        extra={"key": oldest_key, "reason": "max_size"},
                    )

            self._store[normalized] = CacheEntry(
                key=normalized,
                results=tuple(results),
                inserted_at=self.clock(),
            )
            self._logger.debug(
                "Cache entry set",
                extra={"key": normalized, "results": len(results)},
            )

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry.

        Args:
            key: The raw query text.

        Returns:
            True if the key existed and was removed.
        """
        normalized = normalize_key(key)
        with self._lock:
            if normalized in self._store:
                del self._store[normalized]
                self._logger.debug("Cache entry invalidated", extra={"key": normalized})
                return True
            return False

    def size(self) -> int:
        """Return the number of entries in the cache, expired ones included."""
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return cache statistics.

        Returns:
            Dictionary with hit/miss counts and size.
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(hit_rate, 1),
            }

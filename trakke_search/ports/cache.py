"""Cache port - Injectable result cache abstraction.

This protocol defines the contract for the query-result cache, so the
orchestrator can be given a real TTL cache in production and a null
cache (or a cache driven by a fake clock) in tests.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..domain.models import SearchResult


class ResultCachePort(Protocol):
    """Port for caching ranked result lists by query text.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryResultCache) - Production
    - adapters/cache/null_cache.py (NullResultCache) - Testing

    Keys are raw query text; implementations normalize them by
    trimming and lower-casing before lookup.
    """

    def get(self, key: str) -> Optional[Sequence[SearchResult]]:
        """Get cached results for a query.

        Args:
            key: The raw query text.

        Returns:
            The cached results, or None if absent or expired.
        """
        ...

    def put(self, key: str, results: Sequence[SearchResult]) -> None:
        """Store results for a query.

        Args:
            key: The raw query text.
            results: The ranked results to cache.
        """
        ...

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        ...

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry.

        Args:
            key: The raw query text.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        ...

    def size(self) -> int:
        """Return the number of entries in the cache."""
        ...

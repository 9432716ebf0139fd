"""Null result cache for testing.

This cache always misses, ensuring that tests exercising the upstream
clients are not short-circuited by results from an earlier query.

Example:
    orchestrator = SearchOrchestrator(
        context=SearchContext(cache=NullResultCache(), ...),
        ...
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...domain.models import SearchResult


@dataclass
class NullResultCache:
    """No-op cache - always misses.

    Implements the ResultCachePort protocol but never stores anything.
    """

    name: str = "null"

    def get(self, key: str) -> Optional[Sequence[SearchResult]]:
        return None

    def put(self, key: str, results: Sequence[SearchResult]) -> None:
        pass

    def clear(self) -> int:
        return 0

    def invalidate(self, key: str) -> bool:
        return False

    def size(self) -> int:
        return 0

"""Process-wide mutable search state with an explicit owner.

The result cache and the gazetteer's rate-limit timestamp are the only
state that outlives a single ``search()`` call. Both live on a
SearchContext that is built once and injected, so tests can start from
a fresh context instead of resetting module globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..adapters.cache import InMemoryResultCache
from ..adapters.throttling import MinIntervalRateLimiter
from ..config import AppConfig, get_config
from ..ports.cache import ResultCachePort
from ..ports.rate_limit import RateLimiterPort


@dataclass
class SearchContext:
    """Shared cache and rate limiter for one search engine instance.

    Attributes:
        cache: Ranked results by normalized query text
        gazetteer_rate_limiter: Limiter for the place-name registry
    """

    cache: ResultCachePort
    gazetteer_rate_limiter: RateLimiterPort

    @classmethod
    def create(cls, config: Optional[AppConfig] = None) -> SearchContext:
        """Build a context with the configured TTL and interval."""
        config = config or get_config()
        return cls(
            cache=InMemoryResultCache(
                ttl_seconds=config.search.cache_ttl_seconds,
                max_size=config.search.cache_max_size,
                name="search",
            ),
            gazetteer_rate_limiter=MinIntervalRateLimiter(
                min_interval_seconds=config.gazetteer.min_interval_seconds,
                name="gazetteer",
            ),
        )

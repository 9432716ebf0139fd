"""Cache adapters - Implementations of the ResultCachePort.

Available implementations:
- InMemoryResultCache: Thread-safe in-memory cache with TTL
- NullResultCache: No-op cache for testing (always misses)
"""

from .memory_cache import InMemoryResultCache, normalize_key
from .null_cache import NullResultCache

__all__ = ["InMemoryResultCache", "NullResultCache", "normalize_key"]

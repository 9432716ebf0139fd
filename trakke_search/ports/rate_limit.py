"""Rate limiter port - Politeness towards free public registries."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, TypeVar

T = TypeVar("T")


class RateLimiterPort(Protocol):
    """Port for spacing out outbound calls to one upstream.

    Implementations:
    - adapters/throttling/min_interval.py (MinIntervalRateLimiter) - Production
    - adapters/throttling/min_interval.py (NoOpRateLimiter) - Testing
    """

    async def run(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await ``func`` once the next request slot is free.

        Other coroutines keep running while the caller waits.
        """
        ...

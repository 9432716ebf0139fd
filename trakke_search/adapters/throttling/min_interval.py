"""Minimum-interval rate limiting for polite use of public registries.

Wraps geopy's AsyncRateLimiter: there is a single request slot, and a
call may start only once ``min_interval_seconds`` have passed since the
previous call started. geopy guards the slot with a thread lock, not an
asyncio lock, so one limiter can be shared across event loops.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, TypeVar

from geopy.extra.rate_limiter import AsyncRateLimiter

T = TypeVar("T")


async def _invoke(func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
    return await func(*args, **kwargs)


class _ClockedRateLimiter(AsyncRateLimiter):
    """AsyncRateLimiter with an injectable clock and sleep."""

    def __init__(
        self,
        *,
        clock: Callable[[], float],
        sleep: Callable[[float], Awaitable[None]],
        logger: logging.Logger,
        **kwargs: Any,
    ) -> None:
        super().__init__(_invoke, **kwargs)
        self._clock_source = clock
        self._sleep_source = sleep
        self._logger = logger

    def _clock(self) -> float:
        return self._clock_source()

    async def _sleep(self, seconds: float) -> None:
        self._logger.debug("Rate limit wait", extra={"wait_seconds": round(seconds, 3)})
        await self._sleep_source(seconds)


@dataclass
class MinIntervalRateLimiter:
    """Single-slot async rate limiter.

    Implements RateLimiterPort. One instance is shared by every call
    to the same upstream.

    Attributes:
        min_interval_seconds: Minimum gap between the start of two calls
        name: Upstream name for logging
        clock: Monotonic time source, injectable for tests
        sleep: Coroutine used to suspend, injectable for tests
    """

    min_interval_seconds: float = 1.0
    name: str = "upstream"
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)

    _limiter: AsyncRateLimiter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._limiter = _ClockedRateLimiter(
            clock=self.clock,
            sleep=self.sleep,
            logger=logging.getLogger(f"throttling.{self.name}"),
            min_delay_seconds=self.min_interval_seconds,
            error_wait_seconds=self.min_interval_seconds,
            max_retries=0,
            swallow_exceptions=False,
        )

    async def run(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await ``func(*args, **kwargs)`` in the next free request slot.

        Exceptions raised by ``func`` propagate unchanged.
        """
        return await self._limiter(func, *args, **kwargs)


@dataclass
class NoOpRateLimiter:
    """No rate limiting (tests, or upstreams without a politeness policy)."""

    async def run(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        return await func(*args, **kwargs)

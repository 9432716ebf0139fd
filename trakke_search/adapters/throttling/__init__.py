"""Throttling adapters - Implementations of RateLimiterPort.

Available implementations:
- MinIntervalRateLimiter: Single-slot minimum-interval limiter
- NoOpRateLimiter: Never waits
"""

from .min_interval import MinIntervalRateLimiter, NoOpRateLimiter

__all__ = ["MinIntervalRateLimiter", "NoOpRateLimiter"]

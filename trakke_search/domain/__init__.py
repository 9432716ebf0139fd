"""Domain layer - Core search models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    MalformedPayloadError,
    SearchError,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)
from .models import (
    BoundingBox,
    CacheEntry,
    CoordinateNotation,
    ParsedCoordinate,
    PointOfInterest,
    ResultKind,
    ResultSource,
    SearchResult,
)

__all__ = [
    # Models
    "BoundingBox",
    "CacheEntry",
    "CoordinateNotation",
    "ParsedCoordinate",
    "PointOfInterest",
    "ResultKind",
    "ResultSource",
    "SearchResult",
    # Errors
    "SearchError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "UpstreamStatusError",
    "MalformedPayloadError",
    "ConfigurationError",
]

"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the search core and external
adapters. They enable dependency injection and make the system testable.
"""

from .cache import ResultCachePort
from .geocoding import AddressRegistryPort, GazetteerPort, ReverseGeocoderPort
from .rate_limit import RateLimiterPort

__all__ = [
    # Geocoding
    "GazetteerPort",
    "AddressRegistryPort",
    "ReverseGeocoderPort",
    # Throttling
    "RateLimiterPort",
    # Cache
    "ResultCachePort",
]

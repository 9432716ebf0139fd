"""Geocoding adapters - Implementations of the registry ports.

Available implementations:
- KartverketGazetteerAdapter: place-name text search (GazetteerPort)
- KartverketAddressAdapter: address search with fallbacks (AddressRegistryPort)
- KartverketReverseGeocoder: nearest place name (ReverseGeocoderPort)
"""

from .address import KartverketAddressAdapter
from .gazetteer import KartverketGazetteerAdapter
from .http import JsonHttpClient
from .reverse import KartverketReverseGeocoder

__all__ = [
    "JsonHttpClient",
    "KartverketAddressAdapter",
    "KartverketGazetteerAdapter",
    "KartverketReverseGeocoder",
]

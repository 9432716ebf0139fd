"""Geocoding ports - Abstractions over the upstream location registries.

These protocols define the contracts for the external place-name and
address registries, allowing different implementations (Kartverket,
canned fixtures in tests, etc.) to be used by the orchestrator.

Every method is a coroutine and must never raise for upstream problems:
timeouts, error statuses and malformed payloads are reported as "no
results".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import SearchResult


class GazetteerPort(Protocol):
    """Port for place-name text search.

    Implementation: adapters/geocoding/gazetteer.py
    """

    async def search(self, query: str) -> Sequence[SearchResult]:
        """Search place names matching the query.

        Args:
            query: Trimmed query text as typed by the user.

        Returns:
            Place results inside the territory, possibly empty.
        """
        ...


class AddressRegistryPort(Protocol):
    """Port for street address search.

    Implementation: adapters/geocoding/address.py
    """

    async def search(self, query: str) -> Sequence[SearchResult]:
        """Search addresses matching the query.

        Args:
            query: Trimmed query text as typed by the user.

        Returns:
            Address results from the first attempt that found any.
        """
        ...


class ReverseGeocoderPort(Protocol):
    """Port for coordinate-to-name lookup.

    Implementation: adapters/geocoding/reverse.py
    """

    async def lookup(self, lat: float, lng: float) -> Optional[str]:
        """Find the name of the most relevant place near a coordinate.

        Args:
            lat: Latitude in decimal degrees.
            lng: Longitude in decimal degrees.

        Returns:
            The place name, or None if nothing suitable was found.
        """
        ...

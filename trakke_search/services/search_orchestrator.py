"""Search orchestrator - Main entry point of the search engine.

Sequences one federated search:

1. trim the text, empty input yields no results
2. serve from the cache when a fresh entry exists
3. parse coordinates, enriching a hit with a nearby place name
4. search the caller's points of interest
5. query the gazetteer and the address registry concurrently
6. merge, de-duplicate and rank
7. cache and return

No exception escapes ``search()``. Each upstream failure costs only that
upstream's results, and the worst case for the caller is an empty list.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..domain.models import (
    ParsedCoordinate,
    PointOfInterest,
    ResultKind,
    ResultSource,
    SearchResult,
)
from ..ports.geocoding import AddressRegistryPort, GazetteerPort, ReverseGeocoderPort
from .aggregator import ResultAggregator
from .context import SearchContext
from .coordinate_parser import CoordinateParser, format_canonical
from .local_index import LocalIndexSearcher

COORDINATE_RESULT_NAME = "Koordinater"


@dataclass
class SearchOrchestrator:
    """Federated location search over all sources.

    Attributes:
        context: Shared cache and rate limiter
        gazetteer: Place-name registry client
        address_registry: Address registry client
        reverse_geocoder: Optional nearest-place lookup for coordinates
        coordinate_parser: Recognises coordinate notations
        local_searcher: Searches caller-supplied POIs
        aggregator: Merges and ranks partial results
    """

    context: SearchContext
    gazetteer: GazetteerPort
    address_registry: AddressRegistryPort
    reverse_geocoder: Optional[ReverseGeocoderPort] = None
    coordinate_parser: CoordinateParser = field(default_factory=CoordinateParser)
    local_searcher: LocalIndexSearcher = field(default_factory=LocalIndexSearcher)
    aggregator: ResultAggregator = field(default_factory=ResultAggregator)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def search(
        self, text: str, pois: Sequence[PointOfInterest] = ()
    ) -> List[SearchResult]:
        """Run a federated search.

        Args:
            text: Free-form user input.
            pois: Points of interest already loaded by the caller.

        Returns:
            Ranked results, best first. Never raises.
        """
        query = text.strip()
        if not query:
            return []

        cached = self.context.cache.get(query)
        if cached is not None:
            self._logger.debug("Search cache hit", extra={"query": query})
            return list(cached)

        try:
            results = await self._search_sources(query, pois)
        except Exception as e:
            self._logger.error(
                "Search failed",
                extra={"query": query, "error": str(e)},
                exc_info=True,
            )
            return []

        self.context.cache.put(query, results)
        self._logger.info(
            "Search completed",
            extra={"query": query, "results": len(results)},
        )
        return results

    def clear_cache(self) -> int:
        """Drop every cached result list.

        Returns:
            Number of entries that were cleared.
        """
        return self.context.cache.clear()

    async def _search_sources(
        self, query: str, pois: Sequence[PointOfInterest]
    ) -> List[SearchResult]:
        normalized = query.lower()
        parsed = self.coordinate_parser.parse(query)

        local_results = self._search_local(normalized, pois)

        outcomes = await asyncio.gather(
            self._coordinate_results(parsed),
            self.gazetteer.search(query),
            self.address_registry.search(query),
            return_exceptions=True,
        )
        coordinate_results, place_results, address_results = (
            self._unwrap(outcome, source)
            for outcome, source in zip(
                outcomes, ("coordinate-parse", "gazetteer", "address-registry")
            )
        )

        return self.aggregator.merge(
            [coordinate_results, local_results, place_results, address_results],
            normalized,
        )

    def _search_local(
        self, normalized: str, pois: Sequence[PointOfInterest]
    ) -> Sequence[SearchResult]:
        try:
            return self.local_searcher.search(normalized, pois)
        except (AttributeError, TypeError) as e:
            self._logger.warning("Local search failed", extra={"error": str(e)})
            return []

    def _unwrap(self, outcome: object, source: str) -> Sequence[SearchResult]:
        if isinstance(outcome, BaseException):
            self._logger.warning(
                "Search source failed",
                extra={"source": source, "error": repr(outcome)},
            )
            return []
        return outcome  # type: ignore[return-value]

    async def _coordinate_results(
        self, parsed: Optional[ParsedCoordinate]
    ) -> List[SearchResult]:
        if parsed is None:
            return []

        canonical = format_canonical(parsed.lat, parsed.lng)
        place_name = await self._nearby_place(parsed)
        display_name = f"{canonical} ({place_name})" if place_name else canonical

        return [
            SearchResult(
                id=f"coordinates:{parsed.lat:.5f},{parsed.lng:.5f}",
                name=COORDINATE_RESULT_NAME,
                display_name=display_name,
                lat=parsed.lat,
                lng=parsed.lng,
                kind=ResultKind.COORDINATES,
                source=ResultSource.COORDINATE_PARSE,
                description=f"Koordinater ({parsed.notation.value})",
            )
        ]

    async def _nearby_place(self, parsed: ParsedCoordinate) -> Optional[str]:
        if self.reverse_geocoder is None:
            return None
        try:
            return await self.reverse_geocoder.lookup(parsed.lat, parsed.lng)
        except Exception as e:
            self._logger.warning(
                "Reverse geocoding failed",
                extra={"lat": parsed.lat, "lng": parsed.lng, "error": str(e)},
            )
            return None

"""Kartverket place-name (stedsnavn) gazetteer adapter.

Text search against the national place-name registry with:
- Rate limiting shared across all calls to the registry
- Client-side timeout, recovered as "no results"
- Per-record validation (missing geometry or out-of-territory points
  drop that record only)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from ...config import GazetteerConfig, get_config
from ...domain.errors import UpstreamError, UpstreamTimeoutError
from ...domain.models import BoundingBox, ResultKind, ResultSource, SearchResult
from ...ports.rate_limit import RateLimiterPort
from ..throttling import MinIntervalRateLimiter
from .http import JsonHttpClient


def _first_admin_name(record: Mapping[str, Any], units: str, field_name: str) -> Optional[str]:
    entries = record.get(units) or []
    for entry in entries:
        if isinstance(entry, Mapping):
            value = entry.get(field_name)
            if value:
                return str(value)
    return None


def record_name(record: Mapping[str, Any]) -> Optional[str]:
    """Extract the written form of a place name from a registry record.

    Text search records carry ``skrivemåte`` at the top level; point
    lookups nest it in ``stedsnavn``.
    """
    name = record.get("skrivemåte")
    if name:
        return str(name)
    for spelling in record.get("stedsnavn") or []:
        if isinstance(spelling, Mapping) and spelling.get("skrivemåte"):
            return str(spelling["skrivemåte"])
    return None


def record_point(record: Mapping[str, Any]) -> Optional[tuple[float, float]]:
    """Extract (lat, lng) from a record's representative point."""
    point = record.get("representasjonspunkt")
    if not isinstance(point, Mapping):
        return None
    lat = point.get("nord")
    lng = point.get("øst", point.get("ost"))
    if lat is None or lng is None:
        return None
    try:
        return float(lat), float(lng)
    except (TypeError, ValueError):
        return None


def place_from_record(
    record: Mapping[str, Any], territory: BoundingBox
) -> Optional[SearchResult]:
    """Convert one gazetteer record into a place result.

    Returns:
        The result, or None if the record lacks a name or geometry, or
        lies outside the territory.
    """
    name = record_name(record)
    point = record_point(record)
    if name is None or point is None:
        return None

    lat, lng = point
    if not territory.contains(lat, lng):
        return None

    municipality = _first_admin_name(record, "kommuner", "kommunenavn")
    county = _first_admin_name(record, "fylker", "fylkesnavn")
    context = municipality or county
    display_name = f"{name}, {context}" if context and context != name else name

    place_id = record.get("stedsnummer") or f"{lat:.5f},{lng:.5f}"
    place_type = record.get("navneobjekttype")

    return SearchResult(
        id=f"gazetteer:{place_id}",
        name=name,
        display_name=display_name,
        lat=lat,
        lng=lng,
        kind=ResultKind.PLACE,
        source=ResultSource.GAZETTEER,
        description=str(place_type) if place_type else None,
        municipality=municipality,
        county=county,
    )


@dataclass
class KartverketGazetteerAdapter:
    """Place-name search against Kartverket's stedsnavn API.

    This adapter implements GazetteerPort.

    Attributes:
        config: Gazetteer configuration
        territory: Bounding box used to discard out-of-region records
        http: JSON HTTP helper
        rate_limiter: Limiter shared by every call to this registry
    """

    config: GazetteerConfig = field(default_factory=lambda: get_config().gazetteer)
    territory: BoundingBox = field(
        default_factory=lambda: get_config().territory.bounding_box()
    )
    http: JsonHttpClient = field(default_factory=JsonHttpClient)
    rate_limiter: RateLimiterPort = field(
        default_factory=lambda: MinIntervalRateLimiter(
            min_interval_seconds=get_config().gazetteer.min_interval_seconds,
            name="gazetteer",
        )
    )

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def search(self, query: str) -> Sequence[SearchResult]:
        """Search place names starting with the query.

        Args:
            query: Trimmed query text.

        Returns:
            Up to ``max_results`` places inside the territory.
        """
        if not query or not query.strip():
            return []

        params = {
            "sok": f"{query.strip()}*",
            "treffPerSide": self.config.max_results,
            "side": 1,
            "utkoordsys": self.config.coordinate_system,
        }

        try:
            payload = await self.rate_limiter.run(
                self.http.get_json,
                self.config.search_url,
                params,
                upstream="gazetteer",
                timeout_seconds=self.config.timeout_seconds,
            )
        except UpstreamTimeoutError as e:
            self._logger.warning(
                "Gazetteer search timed out",
                extra={"query": query, "timeout": e.timeout_seconds},
            )
            return []
        except UpstreamError as e:
            self._logger.warning(
                "Gazetteer search failed",
                extra={"query": query, "error": str(e)},
            )
            return []

        results: List[SearchResult] = []
        for record in payload.get("navn") or []:
            if not isinstance(record, Mapping):
                continue
            result = place_from_record(record, self.territory)
            if result is None:
                self._logger.debug(
                    "Dropped gazetteer record",
                    extra={"query": query, "stedsnummer": record.get("stedsnummer")},
                )
                continue
            results.append(result)
            if len(results) >= self.config.max_results:
                break

        self._logger.debug(
            "Gazetteer search done",
            extra={"query": query, "results": len(results)},
        )
        return results

"""Search over points of interest already loaded by the caller."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config import get_config
from ..domain.models import (
    BoundingBox,
    PointOfInterest,
    ResultKind,
    ResultSource,
    SearchResult,
)


@dataclass
class LocalIndexSearcher:
    """Case-insensitive substring search over in-memory POIs.

    Pure and synchronous: no I/O, input order preserved.

    Attributes:
        max_results: Maximum number of matches returned
        territory: Envelope outside which POIs are ignored
    """

    max_results: int = field(default_factory=lambda: get_config().search.local_max_results)
    territory: Optional[BoundingBox] = field(
        default_factory=lambda: get_config().territory.bounding_box()
    )

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def search(self, normalized_query: str, pois: Sequence[PointOfInterest]) -> List[SearchResult]:
        """Find POIs whose name or description contains the query.

        Args:
            normalized_query: Trimmed query text (case is ignored).
            pois: Caller-owned points of interest.

        Returns:
            At most ``max_results`` matches, in input order.
        """
        needle = normalized_query.strip().lower()
        if not needle:
            return []

        results: List[SearchResult] = []
        for poi in pois:
            if needle not in poi.name.lower() and needle not in (poi.description or "").lower():
                continue
            if self.territory is not None and not self.territory.contains(poi.lat, poi.lng):
                self._logger.debug("POI outside territory", extra={"poi_id": poi.id})
                continue
            results.append(
                SearchResult(
                    id=f"poi:{poi.id}",
                    name=poi.name,
                    display_name=poi.name,
                    lat=poi.lat,
                    lng=poi.lng,
                    kind=ResultKind.POINT_OF_INTEREST,
                    source=ResultSource.LOCAL_INDEX,
                    description=poi.description or None,
                )
            )
            if len(results) >= self.max_results:
                break
        return results

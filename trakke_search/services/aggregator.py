"""Merging, de-duplication and ranking of partial result sets.

The aggregator is a pure function over the concatenation of all partial
lists. Callers pass the sets in precedence order (coordinate parse,
local index, gazetteer, address registry); when two results lie closer
than the duplicate distance, the earlier one survives.

Ranking tiers, best first:

    coordinates
    points of interest
    places whose name matches the query (exact or prefix)
    addresses whose name matches the query
    other places
    other addresses

Within a tier an exact name match beats a prefix match, which beats
anything else; remaining ties are broken alphabetically by display name
using Norwegian collation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from geopy.distance import great_circle

from ..config import get_config
from ..domain.models import ResultKind, SearchResult

# Æ, Ø, Å sort after Z
_NORWEGIAN_TAIL = str.maketrans({"æ": "{", "ä": "{", "ø": "|", "ö": "|", "å": "}"})


def collation_key(text: str) -> str:
    """Case-insensitive sort key following Norwegian alphabetical order."""
    return text.casefold().translate(_NORWEGIAN_TAIL)


def distance_meters(a: SearchResult, b: SearchResult) -> float:
    """Great-circle distance between two results."""
    return great_circle((a.lat, a.lng), (b.lat, b.lng)).meters


def _name_match(result: SearchResult, query: str) -> tuple[bool, bool]:
    name = result.name.casefold()
    return name == query, name.startswith(query)


def _tier(result: SearchResult, matches: bool) -> int:
    if result.kind is ResultKind.COORDINATES:
        return 0
    if result.kind is ResultKind.POINT_OF_INTEREST:
        return 1
    if result.kind is ResultKind.PLACE:
        return 2 if matches else 4
    return 3 if matches else 5


@dataclass
class ResultAggregator:
    """Merges partial result sets into one ranked list.

    Attributes:
        duplicate_distance_meters: Results closer than this are duplicates
        max_results: Maximum length of the merged list
    """

    duplicate_distance_meters: float = field(
        default_factory=lambda: get_config().search.duplicate_distance_meters
    )
    max_results: int = field(default_factory=lambda: get_config().search.max_results)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def merge(
        self, result_sets: Iterable[Sequence[SearchResult]], normalized_query: str
    ) -> List[SearchResult]:
        """Concatenate, de-duplicate, rank and cap.

        Args:
            result_sets: Partial lists in precedence order.
            normalized_query: Query text used for name matching.

        Returns:
            At most ``max_results`` results, best first.
        """
        combined = [result for results in result_sets for result in results]
        unique = self.deduplicate(combined)
        ranked = self.rank(unique, normalized_query)

        self._logger.debug(
            "Results merged",
            extra={
                "input": len(combined),
                "unique": len(unique),
                "returned": min(len(ranked), self.max_results),
            },
        )
        return ranked[: self.max_results]

    def deduplicate(self, results: Sequence[SearchResult]) -> List[SearchResult]:
        """Drop every result lying too close to an earlier kept result."""
        kept: List[SearchResult] = []
        for result in results:
            if any(
                distance_meters(result, previous) < self.duplicate_distance_meters
                for previous in kept
            ):
                continue
            kept.append(result)
        return kept

    def rank(self, results: Sequence[SearchResult], normalized_query: str) -> List[SearchResult]:
        """Stable sort by tier, name match and display name."""
        query = normalized_query.strip().casefold()

        def sort_key(result: SearchResult) -> tuple[int, bool, bool, str]:
            exact, prefix = _name_match(result, query) if query else (False, False)
            return (
                _tier(result, exact or prefix),
                not exact,
                not prefix,
                collation_key(result.display_name),
            )

        return sorted(results, key=sort_key)

"""Public search surface consumed by the map UI.

Both functions are bound to the default container, so every caller in
the process shares one cache and one gazetteer rate limiter.
"""

from __future__ import annotations

from typing import List, Sequence

from .container import get_container
from .domain.models import PointOfInterest, SearchResult
from .services.search_orchestrator import SearchOrchestrator


def _orchestrator() -> SearchOrchestrator:
    return get_container().resolve(SearchOrchestrator)


async def search(text: str, pois: Sequence[PointOfInterest] = ()) -> List[SearchResult]:
    """Search coordinates, local POIs, place names and addresses.

    Args:
        text: Free-form user input.
        pois: Points of interest currently loaded on the map.

    Returns:
        Ranked results, best first. Never raises.
    """
    return await _orchestrator().search(text, pois)


def clear_cache() -> None:
    """Forget every cached search."""
    _orchestrator().clear_cache()

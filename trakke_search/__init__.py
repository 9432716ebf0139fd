"""Location search engine for the Trakke outdoor map.

Turns free-form text into a ranked list of locations by combining
coordinate parsing, the caller's loaded points of interest, and the
national place-name and address registries.

    results = await trakke_search.search("Galdhøpiggen", pois)
"""

from .api import clear_cache, search
from .domain.models import PointOfInterest, ResultKind, ResultSource, SearchResult

__all__ = [
    "PointOfInterest",
    "ResultKind",
    "ResultSource",
    "SearchResult",
    "clear_cache",
    "search",
]

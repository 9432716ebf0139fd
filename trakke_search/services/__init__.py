"""Services layer - Search orchestration.

This module contains the services that turn free-form text into a
ranked list of locations by driving the adapters.

Available services:
- SearchOrchestrator: Main entry point for federated search
- SearchContext: Cache and rate limiter shared between searches
- CoordinateParser: Coordinate notation recognition
- LocalIndexSearcher: Substring search over caller-supplied POIs
- ResultAggregator: Merge, de-duplicate and rank
"""

from .aggregator import ResultAggregator
from .context import SearchContext
from .coordinate_parser import CoordinateParser, format_canonical
from .local_index import LocalIndexSearcher
from .search_orchestrator import SearchOrchestrator

__all__ = [
    "CoordinateParser",
    "LocalIndexSearcher",
    "ResultAggregator",
    "SearchContext",
    "SearchOrchestrator",
    "format_canonical",
]

"""Immutable domain models for the location search engine.

All models are frozen dataclasses with slots. Search results are created
fresh for each query and never mutated afterwards, which makes them safe
to share between the cache and concurrent callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ResultKind(str, Enum):
    """What a search result points at."""

    COORDINATES = "coordinates"
    POINT_OF_INTEREST = "point-of-interest"
    PLACE = "place"
    ADDRESS = "address"


class ResultSource(str, Enum):
    """Which subsystem produced a search result."""

    LOCAL_INDEX = "local-index"
    GAZETTEER = "gazetteer"
    ADDRESS_REGISTRY = "address-registry"
    COORDINATE_PARSE = "coordinate-parse"


class CoordinateNotation(str, Enum):
    """Textual notation a coordinate was recognised in."""

    DECIMAL = "decimal"
    DEGREES_MINUTES_SECONDS = "degrees-minutes-seconds"


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """A lat/lng envelope in WGS84 decimal degrees.

    Attributes:
        south: Minimum latitude
        west: Minimum longitude
        north: Maximum latitude
        east: Maximum longitude
    """

    south: float
    west: float
    north: float
    east: float

    def contains(self, lat: float, lng: float) -> bool:
        """Check whether a point lies inside the box (edges included)."""
        return self.south <= lat <= self.north and self.west <= lng <= self.east

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return the box as (west, south, east, north)."""
        return (self.west, self.south, self.east, self.north)


@dataclass(frozen=True, slots=True)
class ParsedCoordinate:
    """A coordinate recognised in free text.

    Attributes:
        lat: Latitude in decimal degrees (south is negative)
        lng: Longitude in decimal degrees (west is negative)
        notation: The notation the input was written in
    """

    lat: float
    lng: float
    notation: CoordinateNotation


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A normalized match from any search source.

    Attributes:
        id: Stable identifier, unique per source and upstream identifier
        name: Short proper-case label
        display_name: User-facing label with administrative context
        lat: Latitude in WGS84 decimal degrees
        lng: Longitude in WGS84 decimal degrees
        kind: What the result points at
        source: Which subsystem produced it
        description: Optional free-text description
        municipality: Optional municipality name
        county: Optional county name
        bounding_box: Optional (west, south, east, north) extent
    """

    id: str
    name: str
    display_name: str
    lat: float
    lng: float
    kind: ResultKind
    source: ResultSource
    description: Optional[str] = None
    municipality: Optional[str] = None
    county: Optional[str] = None
    bounding_box: Optional[tuple[float, float, float, float]] = None


@dataclass(frozen=True, slots=True)
class PointOfInterest:
    """An already-loaded point of interest owned by the caller.

    Attributes:
        id: Caller-side identifier
        name: Display name
        description: Free-text description
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
        kind: Caller-side category (e.g. 'cabin', 'viewpoint')
    """

    id: str
    name: str
    description: str
    lat: float
    lng: float
    kind: str = ""


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached, fully ranked result list for one normalized query.

    Attributes:
        key: Normalized query text
        results: Ranked results as returned to the caller
        inserted_at: Clock reading when the entry was stored
    """

    key: str
    results: tuple[SearchResult, ...] = field(default_factory=tuple)
    inserted_at: float = 0.0

    def is_expired(self, now: float, ttl_seconds: float) -> bool:
        """Check whether the entry is older than the TTL at ``now``."""
        return now - self.inserted_at > ttl_seconds

"""Coordinate recognition in free-form search text.

Notations are tried in priority order and the first structural match
inside the territory wins:

1. ``59.90000°N, 10.75000°E``  (canonical output format)
2. ``59.9, 10.75`` / ``59.9 10.75``
3. ``N59.9, E10.75``
4. ``59 54 36 N 10 45 0 E``  (minutes and seconds optional)

A structural match outside the territory is not an error, it simply
isn't a coordinate, so prose such as "2 dogs 3 cats" falls through to
the text searchers.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..config import get_config
from ..domain.models import BoundingBox, CoordinateNotation, ParsedCoordinate

_NUMBER = r"\d+(?:\.\d+)?"
_SEPARATOR = r"(?:\s*,\s*|\s+)"

# Hemisphere letters, with the Norwegian Ø (øst) and V (vest)
_NEGATIVE_HEMISPHERES = {"S", "W", "V"}

_CANONICAL = re.compile(
    rf"^({_NUMBER})\s*°\s*([NS]){_SEPARATOR}({_NUMBER})\s*°\s*([EWØV])$",
    re.IGNORECASE,
)
_DECIMAL_PAIR = re.compile(rf"^(-?{_NUMBER}){_SEPARATOR}(-?{_NUMBER})$")
_HEMISPHERE_PREFIXED = re.compile(
    rf"^([NS])\s*({_NUMBER}){_SEPARATOR}([EWØV])\s*({_NUMBER})$",
    re.IGNORECASE,
)
_DMS_VALUE = rf"({_NUMBER})(?:\s+({_NUMBER})(?:\s+({_NUMBER}))?)?"
_DMS = re.compile(
    rf"^{_DMS_VALUE}\s*([NS])[\s,]+{_DMS_VALUE}\s*([EWØV])$",
    re.IGNORECASE,
)
_DMS_MARKS = re.compile(r"[°'\"′″]")


def format_canonical(lat: float, lng: float) -> str:
    """Format a coordinate the way it is displayed and re-parsed.

    >>> format_canonical(59.9, -10.75)
    '59.90000°N, 10.75000°W'
    """
    lat_hemisphere = "S" if lat < 0 else "N"
    lng_hemisphere = "W" if lng < 0 else "E"
    return f"{abs(lat):.5f}°{lat_hemisphere}, {abs(lng):.5f}°{lng_hemisphere}"


def _signed(value: float, hemisphere: str) -> float:
    return -value if hemisphere.upper() in _NEGATIVE_HEMISPHERES else value


def _dms_to_decimal(degrees: str, minutes: Optional[str], seconds: Optional[str]) -> Optional[float]:
    parts = [p for p in (degrees, minutes, seconds) if p]
    # Only the last component given may carry a fraction
    if any("." in p for p in parts[:-1]):
        return None
    m = float(minutes) if minutes else 0.0
    s = float(seconds) if seconds else 0.0
    if m >= 60 or s >= 60:
        return None
    return float(degrees) + m / 60 + s / 3600


@dataclass
class CoordinateParser:
    """Recognises coordinate notations and converts them to lat/lng.

    Attributes:
        territory: Envelope a parsed coordinate must fall inside
    """

    territory: BoundingBox = field(
        default_factory=lambda: get_config().territory.bounding_box()
    )

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def parse(self, text: str) -> Optional[ParsedCoordinate]:
        """Parse the first supported notation that lies inside the territory.

        Args:
            text: Raw search text.

        Returns:
            The coordinate, or None when the text is not an in-territory
            coordinate.
        """
        cleaned = " ".join(text.split())
        if not cleaned:
            return None

        parsers: List[Callable[[str], Optional[ParsedCoordinate]]] = [
            self._parse_canonical,
            self._parse_decimal_pair,
            self._parse_hemisphere_prefixed,
            self._parse_dms,
        ]
        for parser in parsers:
            parsed = parser(cleaned)
            if parsed is not None and self._accept(parsed):
                self._logger.debug(
                    "Coordinate parsed",
                    extra={"notation": parsed.notation.value, "lat": parsed.lat, "lng": parsed.lng},
                )
                return parsed
        return None

    def _accept(self, parsed: ParsedCoordinate) -> bool:
        if not (math.isfinite(parsed.lat) and math.isfinite(parsed.lng)):
            return False
        return self.territory.contains(parsed.lat, parsed.lng)

    def _parse_canonical(self, text: str) -> Optional[ParsedCoordinate]:
        match = _CANONICAL.match(text)
        if match is None:
            return None
        lat = _signed(float(match.group(1)), match.group(2))
        lng = _signed(float(match.group(3)), match.group(4))
        return ParsedCoordinate(lat=lat, lng=lng, notation=CoordinateNotation.DECIMAL)

    def _parse_decimal_pair(self, text: str) -> Optional[ParsedCoordinate]:
        match = _DECIMAL_PAIR.match(text)
        if match is None:
            return None
        return ParsedCoordinate(
            lat=float(match.group(1)),
            lng=float(match.group(2)),
            notation=CoordinateNotation.DECIMAL,
        )

    def _parse_hemisphere_prefixed(self, text: str) -> Optional[ParsedCoordinate]:
        match = _HEMISPHERE_PREFIXED.match(text)
        if match is None:
            return None
        lat = _signed(float(match.group(2)), match.group(1))
        lng = _signed(float(match.group(4)), match.group(3))
        return ParsedCoordinate(lat=lat, lng=lng, notation=CoordinateNotation.DECIMAL)

    def _parse_dms(self, text: str) -> Optional[ParsedCoordinate]:
        match = _DMS.match(" ".join(_DMS_MARKS.sub(" ", text).split()))
        if match is None:
            return None
        lat = _dms_to_decimal(match.group(1), match.group(2), match.group(3))
        lng = _dms_to_decimal(match.group(5), match.group(6), match.group(7))
        if lat is None or lng is None:
            return None
        return ParsedCoordinate(
            lat=_signed(lat, match.group(4)),
            lng=_signed(lng, match.group(8)),
            notation=CoordinateNotation.DEGREES_MINUTES_SECONDS,
        )

"""Kartverket reverse geocoder (point lookup in the place-name registry).

Used only to decorate a parsed coordinate with a nearby place name, so
every failure degrades to ``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from ...config import GazetteerConfig, get_config
from ...domain.errors import UpstreamError
from .gazetteer import record_name
from .http import JsonHttpClient

# Place-object types, most preferred group first
PLACE_TYPE_PRIORITY: tuple[frozenset[str], ...] = (
    frozenset({"By", "Tettsted", "Bygdelag (bygd)", "Bygdelag", "Grend",
               "Boligfelt", "Tettbebyggelse"}),
    frozenset({"Fjell", "Topp", "Ås", "Haug", "Innsjø", "Vann", "Tjern",
               "Elv", "Bekk", "Dal", "Øy", "Fjord", "Bre", "Vik", "Halvøy",
               "Skog"}),
    frozenset({"Gard", "Bruk", "Eiendom"}),
)


def pick_candidate(candidates: Sequence[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    """Pick the most relevant named candidate.

    The first candidate of the highest-priority type group wins. When no
    candidate has a listed type, the first named candidate is used.
    """
    named = [c for c in candidates if record_name(c)]
    if not named:
        return None
    for group in PLACE_TYPE_PRIORITY:
        for candidate in named:
            if candidate.get("navneobjekttype") in group:
                return candidate
    return named[0]


@dataclass
class KartverketReverseGeocoder:
    """Nearest-place lookup against Kartverket's stedsnavn point API.

    This adapter implements ReverseGeocoderPort.

    Attributes:
        config: Gazetteer configuration (point URL, radius, timeout)
        http: JSON HTTP helper
    """

    config: GazetteerConfig = field(default_factory=lambda: get_config().gazetteer)
    http: JsonHttpClient = field(default_factory=JsonHttpClient)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def lookup(self, lat: float, lng: float) -> Optional[str]:
        """Find the preferred place name within the configured radius.

        Args:
            lat: Latitude in decimal degrees.
            lng: Longitude in decimal degrees.

        Returns:
            The place name, or None if the lookup failed or found nothing.
        """
        params = {
            "nord": f"{lat:.6f}",
            "ost": f"{lng:.6f}",
            "radius": self.config.reverse_radius_meters,
            "maxAnt": self.config.reverse_max_candidates,
            "koordsys": self.config.coordinate_system,
            "utkoordsys": self.config.coordinate_system,
        }

        try:
            payload = await self.http.get_json(
                self.config.point_url,
                params,
                upstream="gazetteer-reverse",
                timeout_seconds=self.config.timeout_seconds,
            )
        except UpstreamError as e:
            self._logger.warning(
                "Reverse lookup failed",
                extra={"lat": lat, "lng": lng, "error": str(e)},
            )
            return None

        candidates: List[Mapping[str, Any]] = [
            c for c in payload.get("navn") or [] if isinstance(c, Mapping)
        ]
        chosen = pick_candidate(candidates)
        if chosen is None:
            self._logger.debug("Reverse lookup found nothing", extra={"lat": lat, "lng": lng})
            return None
        return record_name(chosen)

"""Kartverket address registry adapter.

The registry only matches house numbers exactly, so a query for a
number that does not exist on a real street yields nothing. The adapter
therefore walks a fallback chain and stops at the first attempt that
yields at least one address:

1. the query as typed
2. the street name alone, when the query looks like "<street> <number>"
3. the query as typed, with fuzzy matching enabled

Each attempt carries its own timeout, and a failed attempt moves on to
the next one instead of aborting the chain.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ...config import AddressConfig, get_config
from ...domain.errors import UpstreamError
from ...domain.models import BoundingBox, ResultKind, ResultSource, SearchResult
from .http import JsonHttpClient

_STREET_NUMBER = re.compile(r"^(?P<street>.*\D)\s+(?P<number>\d+\s*[A-Za-z]?)$")


def street_without_number(query: str) -> Optional[str]:
    """Return the street part of a "<street name> <number>" query.

    >>> street_without_number("Storgata 12B")
    'Storgata'
    >>> street_without_number("Storgata") is None
    True
    """
    match = _STREET_NUMBER.match(query.strip())
    if match is None:
        return None
    street = match.group("street").strip().rstrip(",").strip()
    return street or None


def address_from_record(
    record: Mapping[str, Any], territory: BoundingBox
) -> Optional[SearchResult]:
    """Convert one address record into an address result."""
    text = record.get("adressetekst")
    point = record.get("representasjonspunkt")
    if not text or not isinstance(point, Mapping):
        return None

    try:
        lat = float(point["lat"])
        lng = float(point["lon"])
    except (KeyError, TypeError, ValueError):
        return None

    if not territory.contains(lat, lng):
        return None

    municipality = record.get("kommunenavn") or None
    postcode = record.get("postnummer") or ""
    post_town = record.get("poststed") or ""
    description = f"{postcode} {post_town}".strip() or None
    display_name = f"{text}, {municipality}" if municipality else str(text)

    return SearchResult(
        id=f"address:{record.get('kommunenummer', '')}:{text}:{postcode}",
        name=str(text),
        display_name=display_name,
        lat=lat,
        lng=lng,
        kind=ResultKind.ADDRESS,
        source=ResultSource.ADDRESS_REGISTRY,
        description=description,
        municipality=str(municipality) if municipality else None,
    )


@dataclass
class KartverketAddressAdapter:
    """Address search against Kartverket's adresser API.

    This adapter implements AddressRegistryPort.

    Attributes:
        config: Address registry configuration
        territory: Bounding box used to discard out-of-region records
        http: JSON HTTP helper
    """

    config: AddressConfig = field(default_factory=lambda: get_config().address)
    territory: BoundingBox = field(
        default_factory=lambda: get_config().territory.bounding_box()
    )
    http: JsonHttpClient = field(default_factory=JsonHttpClient)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def attempts(self, query: str) -> List[tuple[str, bool]]:
        """Build the (text, fuzzy) attempts for a query, in order."""
        query = query.strip()
        chain = [(query, False)]
        street = street_without_number(query)
        if street is not None and street != query:
            chain.append((street, False))
        chain.append((query, True))
        return chain

    async def search(self, query: str) -> Sequence[SearchResult]:
        """Search addresses, falling back until an attempt finds something.

        Args:
            query: Trimmed query text.

        Returns:
            Up to ``max_results`` addresses from the first fruitful attempt.
        """
        if not query or not query.strip():
            return []

        for text, fuzzy in self.attempts(query):
            results = await self._attempt(text, fuzzy)
            if results:
                if text != query.strip() or fuzzy:
                    self._logger.info(
                        "Address fallback used",
                        extra={"query": query, "attempt": text, "fuzzy": fuzzy},
                    )
                return results

        self._logger.debug("No addresses found", extra={"query": query})
        return []

    async def _attempt(self, text: str, fuzzy: bool) -> List[SearchResult]:
        params: Dict[str, Any] = {
            "sok": text,
            "treffPerSide": self.config.max_results,
            "side": 1,
        }
        if fuzzy:
            params["fuzzy"] = "true"

        try:
            payload = await self.http.get_json(
                self.config.search_url,
                params,
                upstream="address-registry",
                timeout_seconds=self.config.timeout_seconds,
            )
        except UpstreamError as e:
            self._logger.warning(
                "Address attempt failed",
                extra={"attempt": text, "fuzzy": fuzzy, "error": str(e)},
            )
            return []

        results: List[SearchResult] = []
        for record in payload.get("adresser") or []:
            if not isinstance(record, Mapping):
                continue
            result = address_from_record(record, self.territory)
            if result is None:
                self._logger.debug(
                    "Dropped address record",
                    extra={"attempt": text, "adressetekst": record.get("adressetekst")},
                )
                continue
            results.append(result)
            if len(results) >= self.config.max_results:
                break
        return results

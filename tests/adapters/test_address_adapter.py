"""Tests for the address adapter and its fallback chain."""

import httpx
import pytest

from trakke_search.adapters.geocoding.address import (
    KartverketAddressAdapter,
    address_from_record,
    street_without_number,
)
from trakke_search.config import AddressConfig
from trakke_search.domain.models import ResultKind, ResultSource


def adresse(text, lat, lon, *, kommune="Oslo", postnummer="0159", poststed="OSLO"):
    return {
        "adressetekst": text,
        "kommunenavn": kommune,
        "kommunenummer": "0301",
        "postnummer": postnummer,
        "poststed": poststed,
        "representasjonspunkt": {"epsg": "EPSG:4258", "lat": lat, "lon": lon},
    }


STORGATA = [adresse("Storgata 1", 59.9142, 10.7502), adresse("Storgata 3", 59.9146, 10.7510)]


class RecordingRegistry:
    """MockTransport handler answering from a table of (sok, fuzzy) -> response."""

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def __call__(self, request):
        params = request.url.params
        key = (params["sok"], params.get("fuzzy") == "true")
        self.calls.append(key)
        answer = self.answers.get(key, [])
        if isinstance(answer, httpx.Response):
            return answer
        if isinstance(answer, Exception):
            raise answer
        return httpx.Response(200, json={"metadata": {}, "adresser": answer})


@pytest.fixture
def build(mock_http, territory):
    def make(registry):
        return KartverketAddressAdapter(
            config=AddressConfig(search_url="https://adresser.test/sok"),
            territory=territory,
            http=mock_http(registry),
        )

    return make


async def test_exact_query_hit_stops_chain(build):
    registry = RecordingRegistry({("Storgata 1", False): STORGATA[:1]})
    results = await build(registry).search("Storgata 1")

    assert [r.name for r in results] == ["Storgata 1"]
    assert registry.calls == [("Storgata 1", False)]
    result = results[0]
    assert result.kind is ResultKind.ADDRESS
    assert result.source is ResultSource.ADDRESS_REGISTRY
    assert result.display_name == "Storgata 1, Oslo"
    assert result.description == "0159 OSLO"
    assert result.municipality == "Oslo"


async def test_missing_house_number_falls_back_to_street(build):
    registry = RecordingRegistry({("Storgata", False): STORGATA})
    results = await build(registry).search("Storgata 999999")

    assert len(results) >= 1
    assert registry.calls == [("Storgata 999999", False), ("Storgata", False)]


async def test_fuzzy_attempt_is_last_resort(build):
    registry = RecordingRegistry({("Storgta", True): STORGATA})
    results = await build(registry).search("Storgta")

    assert len(results) == 2
    assert registry.calls == [("Storgta", False), ("Storgta", True)]


async def test_full_chain_when_nothing_matches(build):
    registry = RecordingRegistry({})
    assert await build(registry).search("Storgata 12B") == []
    assert registry.calls == [
        ("Storgata 12B", False),
        ("Storgata", False),
        ("Storgata 12B", True),
    ]


async def test_failed_attempt_does_not_abort_chain(build):
    registry = RecordingRegistry(
        {
            ("Storgata 5", False): httpx.Response(502),
            ("Storgata", False): httpx.ReadTimeout("slow"),
            ("Storgata 5", True): STORGATA,
        }
    )
    results = await build(registry).search("Storgata 5")

    assert len(results) == 2
    assert len(registry.calls) == 3


async def test_result_cap(build):
    many = [adresse(f"Storgata {i}", 59.91 + i * 0.001, 10.75) for i in range(1, 10)]
    registry = RecordingRegistry({("Storgata", False): many})
    assert len(await build(registry).search("Storgata")) == 6


async def test_records_without_geometry_are_dropped(build):
    broken = {"adressetekst": "Storgata 2", "kommunenavn": "Oslo"}
    registry = RecordingRegistry({("Storgata", False): [broken, STORGATA[0]]})
    results = await build(registry).search("Storgata")
    assert [r.name for r in results] == ["Storgata 1"]


async def test_fuzzy_flag_sent_only_on_last_attempt(mock_http, territory):
    seen = []

    def handler(request):
        seen.append(dict(request.url.params))
        return httpx.Response(200, json={"adresser": []})

    adapter = KartverketAddressAdapter(territory=territory, http=mock_http(handler))
    await adapter.search("Karl Johans gate")

    assert "fuzzy" not in seen[0]
    assert seen[-1]["fuzzy"] == "true"
    assert seen[0]["treffPerSide"] == "6"


@pytest.mark.parametrize(
    "query,street",
    [
        ("Storgata 1", "Storgata"),
        ("Storgata 12B", "Storgata"),
        ("Karl Johans gate 22", "Karl Johans gate"),
        ("Storgata", None),
        ("1 2", None),
    ],
)
def test_street_without_number(query, street):
    assert street_without_number(query) == street


def test_out_of_territory_address_is_dropped(territory):
    assert address_from_record(adresse("Longyearbyen 1", 78.22, 15.65), territory) is None

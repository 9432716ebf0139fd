"""Tests for the reverse geocoder."""

import httpx
import pytest

from trakke_search.adapters.geocoding.reverse import KartverketReverseGeocoder, pick_candidate
from trakke_search.config import GazetteerConfig


def candidate(name, kind):
    return {
        "stedsnavn": [{"skrivemåte": name}],
        "navneobjekttype": kind,
        "representasjonspunkt": {"nord": 59.9, "øst": 10.7},
        "meterFraPunkt": 100,
    }


@pytest.fixture
def config():
    return GazetteerConfig(point_url="https://stedsnavn.test/punkt")


class TestPickCandidate:
    def test_populated_place_beats_nature(self):
        chosen = pick_candidate([candidate("Holmenkollen", "Ås"), candidate("Oslo", "By")])
        assert chosen["stedsnavn"][0]["skrivemåte"] == "Oslo"

    def test_nature_beats_generic(self):
        chosen = pick_candidate([candidate("Nordre gard", "Gard"), candidate("Sognsvann", "Vann")])
        assert chosen["stedsnavn"][0]["skrivemåte"] == "Sognsvann"

    def test_falls_back_to_first_candidate(self):
        chosen = pick_candidate([candidate("Stasjonen", "Stasjon"), candidate("Brua", "Bru")])
        assert chosen["stedsnavn"][0]["skrivemåte"] == "Stasjonen"

    def test_unnamed_candidates_are_ignored(self):
        assert pick_candidate([{"navneobjekttype": "By"}]) is None
        assert pick_candidate([]) is None


async def test_lookup_queries_point_with_radius(mock_http, config):
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json={"navn": [candidate("Vettakollen", "Topp"), candidate("Oslo", "By")]})

    geocoder = KartverketReverseGeocoder(config=config, http=mock_http(handler))
    assert await geocoder.lookup(59.96, 10.69) == "Oslo"
    assert seen["nord"] == "59.960000"
    assert seen["ost"] == "10.690000"
    assert seen["radius"] == "1000"
    assert "maxAnt" in seen


async def test_lookup_without_candidates(mock_http, config):
    geocoder = KartverketReverseGeocoder(
        config=config, http=mock_http(lambda r: httpx.Response(200, json={"navn": []}))
    )
    assert await geocoder.lookup(65.0, 14.0) is None


async def test_lookup_failure_returns_none(mock_http, config):
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    geocoder = KartverketReverseGeocoder(config=config, http=mock_http(handler))
    assert await geocoder.lookup(59.9, 10.7) is None

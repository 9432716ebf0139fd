"""Tests for the public functions and the command line."""

import json

import pytest

import trakke_search
from trakke_search import __main__ as cli
from trakke_search.container import get_container
from trakke_search.domain.models import ResultKind, ResultSource, SearchResult
from trakke_search.ports.geocoding import (
    AddressRegistryPort,
    GazetteerPort,
    ReverseGeocoderPort,
)


class CountingGazetteer:
    def __init__(self):
        self.calls = 0

    async def search(self, query):
        self.calls += 1
        return [
            SearchResult(
                id="gazetteer:1",
                name="Tromsø",
                display_name="Tromsø, Tromsø",
                lat=69.65,
                lng=18.96,
                kind=ResultKind.PLACE,
                source=ResultSource.GAZETTEER,
            )
        ]


class Empty:
    async def search(self, query):
        return []

    async def lookup(self, lat, lng):
        return None


@pytest.fixture
def gazetteer():
    fake = CountingGazetteer()
    container = get_container()
    container.register(GazetteerPort, lambda: fake)
    container.register(AddressRegistryPort, Empty)
    container.register(ReverseGeocoderPort, Empty)
    return fake


async def test_search_and_clear_cache(gazetteer):
    results = await trakke_search.search("Tromsø")
    await trakke_search.search("tromsø")

    assert [r.name for r in results] == ["Tromsø"]
    assert gazetteer.calls == 1

    trakke_search.clear_cache()
    await trakke_search.search("Tromsø")
    assert gazetteer.calls == 2


def test_load_pois(tmp_path):
    path = tmp_path / "pois.json"
    path.write_text(
        json.dumps([
            {"id": 12, "name": "Fløyen", "description": "Utsiktspunkt", "lat": 60.39, "lng": 5.34, "type": "viewpoint"},
            {"id": "b", "name": "Ulriken", "lat": "60.377", "lng": "5.386"},
        ]),
        encoding="utf-8",
    )

    pois = cli.load_pois(path)

    assert [p.id for p in pois] == ["12", "b"]
    assert pois[0].kind == "viewpoint"
    assert pois[1].description == ""
    assert pois[1].lat == 60.377


def test_main_prints_ranked_results(gazetteer, capsys):
    assert cli.main(["Tromsø"]) == 0

    out = capsys.readouterr().out
    assert "1. [place] Tromsø, Tromsø (69.65000, 18.96000) via gazetteer" in out


def test_main_rejects_unreadable_pois(tmp_path, capsys):
    assert cli.main(["Tromsø", "--pois", str(tmp_path / "missing.json")]) == 1
    assert "Could not read POIs" in capsys.readouterr().err

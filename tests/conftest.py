"""Shared fixtures for the search engine tests."""

import os
import sys
from typing import Callable, Optional

import httpx
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from trakke_search.adapters.geocoding.http import JsonHttpClient
from trakke_search.config import HttpConfig, reset_config
from trakke_search.container import reset_container
from trakke_search.domain.models import (
    BoundingBox,
    ResultKind,
    ResultSource,
    SearchResult,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def fresh_globals():
    """Every test starts from default configuration and container."""
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def territory() -> BoundingBox:
    return BoundingBox(south=57.5, west=4.0, north=71.5, east=31.5)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], JsonHttpClient]:
    """Build a JsonHttpClient whose requests are answered by ``handler``."""

    def build(handler) -> JsonHttpClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return JsonHttpClient(config=HttpConfig(user_agent="trakke-tests/1.0"), client=client)

    return build


@pytest.fixture
def make_result() -> Callable[..., SearchResult]:
    """Factory for search results with sensible defaults."""

    def build(
        name: str,
        lat: float = 60.0,
        lng: float = 10.0,
        kind: ResultKind = ResultKind.PLACE,
        source: Optional[ResultSource] = None,
        display_name: Optional[str] = None,
    ) -> SearchResult:
        if source is None:
            source = {
                ResultKind.COORDINATES: ResultSource.COORDINATE_PARSE,
                ResultKind.POINT_OF_INTEREST: ResultSource.LOCAL_INDEX,
                ResultKind.PLACE: ResultSource.GAZETTEER,
                ResultKind.ADDRESS: ResultSource.ADDRESS_REGISTRY,
            }[kind]
        return SearchResult(
            id=f"{source.value}:{name}:{lat}:{lng}",
            name=name,
            display_name=display_name or name,
            lat=lat,
            lng=lng,
            kind=kind,
            source=source,
        )

    return build

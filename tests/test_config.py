"""Tests for environment-driven configuration."""

import pytest

from trakke_search.config import AppConfig, TerritoryConfig, get_config, reset_config
from trakke_search.domain.errors import ConfigurationError
from trakke_search.domain.models import BoundingBox


def test_defaults():
    config = AppConfig()
    assert config.territory.bounding_box() == BoundingBox(57.5, 4.0, 71.5, 31.5)
    assert config.gazetteer.min_interval_seconds == 1.0
    assert config.search.cache_ttl_seconds == 300
    assert config.search.duplicate_distance_meters == 500
    assert config.http.user_agent.startswith("Trakke-App/")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TRAKKE_SEARCH_CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("TRAKKE_GAZETTEER_MAX_RESULTS", "3")
    monkeypatch.setenv("TRAKKE_TERRITORY_NORTH", "72.0")
    reset_config()

    config = get_config()

    assert config.search.cache_ttl_seconds == 60
    assert config.gazetteer.max_results == 3
    assert config.territory.north == 72.0


def test_get_config_is_cached():
    assert get_config() is get_config()


@pytest.mark.parametrize(
    "edges, setting",
    [
        ({"south": 70.0, "north": 60.0}, "TRAKKE_TERRITORY_SOUTH"),
        ({"west": 10.0, "east": 10.0}, "TRAKKE_TERRITORY_WEST"),
    ],
)
def test_inverted_territory_rejected(edges, setting):
    with pytest.raises(ConfigurationError) as exc_info:
        TerritoryConfig(**edges).bounding_box()
    assert exc_info.value.setting_name == setting

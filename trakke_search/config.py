"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for upstream endpoints,
timeouts, result caps and the territory bounding box.

Configuration can be overridden via environment variables:
- TRAKKE_TERRITORY_NORTH=71.5
- TRAKKE_GAZETTEER_TIMEOUT_SECONDS=5
- TRAKKE_SEARCH_CACHE_TTL_SECONDS=60
- TRAKKE_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError
from .domain.models import BoundingBox


class TerritoryConfig(BaseSettings):
    """Territory bounding box, mainland Norway by default.

    Environment variables prefixed with TRAKKE_TERRITORY_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAKKE_TERRITORY_")

    south: float = 57.5
    west: float = 4.0
    north: float = 71.5
    east: float = 31.5

    def bounding_box(self) -> BoundingBox:
        """Build the territory box.

        Raises:
            ConfigurationError: If the edges are inverted or degenerate.
        """
        if self.south >= self.north:
            raise ConfigurationError(
                f"Territory south ({self.south}) must be below north ({self.north})",
                setting_name="TRAKKE_TERRITORY_SOUTH",
            )
        if self.west >= self.east:
            raise ConfigurationError(
                f"Territory west ({self.west}) must be below east ({self.east})",
                setting_name="TRAKKE_TERRITORY_WEST",
            )
        return BoundingBox(
            south=self.south, west=self.west, north=self.north, east=self.east
        )


class HttpConfig(BaseSettings):
    """Outbound HTTP settings shared by all upstream clients.

    Environment variables prefixed with TRAKKE_HTTP_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAKKE_HTTP_")

    user_agent: str = "Trakke-App/1.0 (https://github.com/elzacka/trakke-react)"


class GazetteerConfig(BaseSettings):
    """Place-name registry settings (text search and reverse lookup).

    Environment variables prefixed with TRAKKE_GAZETTEER_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAKKE_GAZETTEER_")

    search_url: str = "https://ws.geonorge.no/stedsnavn/v1/navn"
    point_url: str = "https://ws.geonorge.no/stedsnavn/v1/punkt"
    timeout_seconds: float = 8.0
    max_results: int = 6
    min_interval_seconds: float = 1.0
    reverse_radius_meters: int = 1000
    reverse_max_candidates: int = 10
    coordinate_system: int = 4258


class AddressConfig(BaseSettings):
    """Address registry settings.

    Environment variables prefixed with TRAKKE_ADDRESS_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAKKE_ADDRESS_")

    search_url: str = "https://ws.geonorge.no/adresser/v1/sok"
    timeout_seconds: float = 8.0
    max_results: int = 6


class SearchConfig(BaseSettings):
    """Orchestration, caching and ranking settings.

    Environment variables prefixed with TRAKKE_SEARCH_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAKKE_SEARCH_")

    cache_ttl_seconds: float = 300.0
    cache_max_size: Optional[int] = 500
    local_max_results: int = 5
    duplicate_distance_meters: float = 500.0
    max_results: int = 12


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TRAKKE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAKKE_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.gazetteer.search_url)
        print(config.territory.bounding_box())

    Environment variables prefixed with TRAKKE_.
    """

    model_config = SettingsConfigDict(env_prefix="TRAKKE_")

    territory: TerritoryConfig = Field(default_factory=TerritoryConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    gazetteer: GazetteerConfig = Field(default_factory=GazetteerConfig)
    address: AddressConfig = Field(default_factory=AddressConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the observability settings to the root logger."""
    config = config or get_config().observability
    logging.basicConfig(level=config.level.upper(), format=config.format)

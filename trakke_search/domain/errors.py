"""Typed domain errors for the location search engine.

Upstream failures are raised as typed errors by the HTTP layer and
recovered by each client, so that ``search()`` itself never fails.

All errors inherit from SearchError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SearchError(Exception):
    """Base error for the search domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class UpstreamError(SearchError):
    """An upstream registry could not be queried.

    Attributes:
        upstream: Short name of the registry (e.g. 'gazetteer')
        url: Endpoint that was called
    """

    upstream: str = ""
    url: str = ""


@dataclass
class UpstreamTimeoutError(UpstreamError):
    """The request did not complete within the client-side timeout.

    Attributes:
        timeout_seconds: The timeout that was exceeded
    """

    timeout_seconds: float = 0.0


@dataclass
class UpstreamStatusError(UpstreamError):
    """The upstream answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code returned
    """

    status_code: int = 0


@dataclass
class MalformedPayloadError(UpstreamError):
    """The upstream body was not the JSON document we expect."""


@dataclass
class ConfigurationError(SearchError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None

"""Shared proxy types.

Router, forwarder and HTTP boundary all import these to avoid drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LATITUDE = 55.7558
DEFAULT_LONGITUDE = 37.6173


class QueryKind(str, Enum):
    """Supported weather query shapes."""

    CURRENT = "current"
    FORECAST_H1 = "forecast_h1"
    FORECAST_H3 = "forecast_h3"
    FORECAST_H6 = "forecast_h6"
    FORECAST_H24 = "forecast_h24"


class FailureKind(str, Enum):
    VALIDATION_ERROR = "validation_error"
    UPSTREAM_HTTP_ERROR = "upstream_http_error"
    TRANSPORT_ERROR = "transport_error"
    UNEXPECTED = "unexpected"


class Coordinate(BaseModel):
    """Query location. Defaults to Moscow."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(default=DEFAULT_LATITUDE, description="Latitude in degrees")
    longitude: float = Field(default=DEFAULT_LONGITUDE, description="Longitude in degrees")

    def in_range(self) -> bool:
        # Written as the out-of-range test: NaN matches no bound and passes through.
        return not (
            self.latitude < -90
            or self.latitude > 90
            or self.longitude < -180
            or self.longitude > 180
        )


@dataclass(frozen=True)
class QuerySpec:
    """Registry entry binding a query kind to its public route and upstream path."""
    kind: QueryKind
    route: str
    upstream_path: str
    summary: str


@dataclass(frozen=True)
class ProxySuccess:
    body: str


@dataclass(frozen=True)
class ProxyFailure:
    kind: FailureKind
    status: int
    message: str


ProxyResult = Union[ProxySuccess, ProxyFailure]

"""Coordinate validation and dispatch to the upstream forwarder."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from .logging import get_logger
from .queries import get_query_spec
from .schemas import Coordinate, FailureKind, ProxyFailure, ProxyResult, QueryKind

INVALID_COORDINATES_MESSAGE = (
    "Latitude must be between -90 and 90, and longitude must be between -180 and 180."
)

logger = get_logger("router")


class Forwarder(Protocol):
    async def fetch(self, url: str) -> ProxyResult: ...


def format_coordinate(value: float) -> str:
    # repr() is locale independent and round-trips; integral values lose ".0".
    # Exponents stay lower case (1e-05) and NaN is sent as "nan".
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def build_upstream_url(base_url: str, kind: QueryKind, coordinate: Coordinate) -> str:
    spec = get_query_spec(kind)
    return (
        f"{base_url.rstrip('/')}/{spec.upstream_path}"
        f"?latitude={format_coordinate(coordinate.latitude)}"
        f"&longitude={format_coordinate(coordinate.longitude)}"
    )


def validate_coordinate(coordinate: Coordinate) -> ProxyFailure | None:
    if coordinate.in_range():
        return None
    return ProxyFailure(
        kind=FailureKind.VALIDATION_ERROR,
        status=400,
        message=INVALID_COORDINATES_MESSAGE,
    )


async def route_query(
    kind: QueryKind,
    coordinate: Coordinate,
    forwarder: Forwarder,
    *,
    base_url: str,
    client_ip: str | None = None,
) -> ProxyResult:
    """Validate the coordinate, build the upstream URL and forward the call.

    The audit event is written before validation so rejected requests are
    recorded too.
    """
    url = build_upstream_url(base_url, kind, coordinate)
    latitude = format_coordinate(coordinate.latitude)
    longitude = format_coordinate(coordinate.longitude)
    logger.info(
        "weather_request_received",
        extra={
            "extra": {
                "request_time": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
                "query": kind.value,
                "url": url,
                "client_ip": client_ip,
                "latitude": latitude,
                "longitude": longitude,
            }
        },
    )

    failure = validate_coordinate(coordinate)
    if failure is not None:
        logger.warning(
            "weather_invalid_coordinates",
            extra={"extra": {"latitude": latitude, "longitude": longitude}},
        )
        return failure

    result = await forwarder.fetch(url)
    if isinstance(result, ProxyFailure):
        log = logger.warning if result.kind is FailureKind.UPSTREAM_HTTP_ERROR else logger.error
        log(
            "weather_upstream_failed",
            extra={
                "extra": {
                    "url": url,
                    "error_kind": result.kind.value,
                    "status_code": result.status,
                    "error": result.message,
                }
            },
        )
        return result

    logger.info(
        "weather_upstream_ok",
        extra={"extra": {"url": url, "response_length": len(result.body)}},
    )
    return result

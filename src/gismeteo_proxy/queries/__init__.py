"""Registry of the fixed weather query kinds."""

from __future__ import annotations

from ..schemas import QueryKind, QuerySpec

QUERY_SPECS: dict[QueryKind, QuerySpec] = {
    QueryKind.CURRENT: QuerySpec(
        kind=QueryKind.CURRENT,
        route="bsp_abcd",
        upstream_path="current/",
        summary="Current weather for a coordinate.",
    ),
    QueryKind.FORECAST_H1: QuerySpec(
        kind=QueryKind.FORECAST_H1,
        route="bsp_efgh",
        upstream_path="forecast/h1/",
        summary="Forecast in 1-hour steps.",
    ),
    QueryKind.FORECAST_H3: QuerySpec(
        kind=QueryKind.FORECAST_H3,
        route="bsp_ijkl",
        upstream_path="forecast/h3/",
        summary="Forecast in 3-hour steps.",
    ),
    QueryKind.FORECAST_H6: QuerySpec(
        kind=QueryKind.FORECAST_H6,
        route="bsp_mnop",
        upstream_path="forecast/h6/",
        summary="Forecast in 6-hour steps.",
    ),
    QueryKind.FORECAST_H24: QuerySpec(
        kind=QueryKind.FORECAST_H24,
        route="bsp_qrst",
        upstream_path="forecast/h24/",
        summary="Forecast in 24-hour steps.",
    ),
}


def get_query_spec(kind: QueryKind) -> QuerySpec:
    return QUERY_SPECS[kind]


def list_query_specs() -> list[QuerySpec]:
    return list(QUERY_SPECS.values())

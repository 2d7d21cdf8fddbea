"""FastAPI app for the Gismeteo weather proxy.

One GET route per registered query kind; every route funnels into the
same router call.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response

from .adapters.gismeteo import GismeteoForwarder
from .logging import configure_logging, get_logger
from .queries import list_query_specs
from .router import Forwarder, route_query
from .schemas import DEFAULT_LATITUDE, DEFAULT_LONGITUDE, Coordinate, ProxyFailure, QuerySpec
from .settings import ProxySettings, get_settings

API_VERSION = "0.1.0"
REDACTED_HEADERS = {"authorization", "cookie", "x-gismeteo-token"}

logger = get_logger("server")


def build_forwarder(settings: ProxySettings) -> GismeteoForwarder:
    return GismeteoForwarder(
        settings.gismeteo_token,
        user_agent=settings.user_agent,
        accept_any_certificate=settings.accept_any_certificate,
        timeout_s=settings.request_timeout_s,
    )


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def _make_endpoint(spec: QuerySpec) -> Callable[..., Awaitable[Response]]:
    async def endpoint(
        request: Request,
        latitude: float = Query(default=DEFAULT_LATITUDE),
        longitude: float = Query(default=DEFAULT_LONGITUDE),
    ) -> Response:
        forwarder: Forwarder = request.app.state.forwarder
        settings: ProxySettings = request.app.state.settings
        result = await route_query(
            spec.kind,
            Coordinate(latitude=latitude, longitude=longitude),
            forwarder,
            base_url=settings.gismeteo_base_url,
            client_ip=_client_ip(request),
        )
        if isinstance(result, ProxyFailure):
            return PlainTextResponse(result.message, status_code=result.status)
        return PlainTextResponse(result.body)

    endpoint.__name__ = f"get_{spec.kind.value}"
    return endpoint


def build_weather_router() -> APIRouter:
    router = APIRouter(prefix="/api/weather", tags=["weather"])
    for spec in list_query_specs():
        router.add_api_route(
            f"/{spec.route}",
            _make_endpoint(spec),
            methods=["GET"],
            summary=spec.summary,
            response_class=PlainTextResponse,
        )
    return router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: ProxySettings = app.state.settings
    configure_logging(settings.log_level, settings.log_dir)
    # A missing token raises here and aborts startup before serving.
    if app.state.forwarder is None:
        app.state.forwarder = build_forwarder(settings)
    logger.info(
        "proxy_server_config",
        extra={
            "extra": {
                "gismeteo_base_url": settings.gismeteo_base_url,
                "accept_any_certificate": settings.accept_any_certificate,
                "request_timeout_s": settings.request_timeout_s,
            }
        },
    )
    yield


def create_app(settings: ProxySettings | None = None, forwarder: Forwarder | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Gismeteo Weather Proxy",
        version=API_VERSION,
        docs_url="/swagger",
        openapi_url="/swagger/v1/swagger.json",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.forwarder = forwarder

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        headers = {
            key: "***" if key.lower() in REDACTED_HEADERS else value
            for key, value in request.headers.items()
        }
        logger.info(
            "http_request",
            extra={
                "extra": {
                    "method": request.method,
                    "path": request.url.path,
                    "remote_ip": _client_ip(request),
                    "headers": headers,
                }
            },
        )
        response = await call_next(request)
        logger.info(
            "http_response",
            extra={"extra": {"path": request.url.path, "status_code": response.status_code}},
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_query(request: Request, exc: RequestValidationError) -> Response:
        # Unparseable query values are a client error, reported like the range check.
        message = "; ".join(
            f"{error['loc'][-1]}: {error['msg']}" for error in exc.errors()
        )
        logger.warning(
            "http_invalid_query",
            extra={"extra": {"path": request.url.path, "error": message}},
        )
        return PlainTextResponse(message, status_code=400)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(build_weather_router())
    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "gismeteo_proxy.server:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import RecordingForwarder
from gismeteo_proxy.adapters import MissingCredentialError
from gismeteo_proxy.adapters.gismeteo import GismeteoForwarder
from gismeteo_proxy.router import INVALID_COORDINATES_MESSAGE
from gismeteo_proxy.schemas import FailureKind, ProxyFailure
from gismeteo_proxy.server import create_app
from gismeteo_proxy.settings import GISMETEO_BASE_URL, ProxySettings


def test_current_weather_with_defaults(settings, forwarder):
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get("/api/weather/bsp_abcd")
    assert resp.status_code == 200
    assert resp.text == '{"kind": "Obs"}'
    assert forwarder.urls == [f"{GISMETEO_BASE_URL}/current/?latitude=55.7558&longitude=37.6173"]


@pytest.mark.parametrize(
    "route, path",
    [
        ("bsp_efgh", "forecast/h1/"),
        ("bsp_ijkl", "forecast/h3/"),
        ("bsp_mnop", "forecast/h6/"),
        ("bsp_qrst", "forecast/h24/"),
    ],
)
def test_forecast_routes(settings, forwarder, route, path):
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get(f"/api/weather/{route}", params={"latitude": "48.8566", "longitude": "2.3522"})
    assert resp.status_code == 200
    assert forwarder.urls == [f"{GISMETEO_BASE_URL}/{path}?latitude=48.8566&longitude=2.3522"]


def test_invalid_coordinates_return_400(settings, forwarder):
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get("/api/weather/bsp_abcd", params={"latitude": 120, "longitude": 0})
    assert resp.status_code == 400
    assert resp.text == INVALID_COORDINATES_MESSAGE
    assert forwarder.urls == []


def test_nan_latitude_reaches_upstream(settings, forwarder):
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get("/api/weather/bsp_abcd", params={"latitude": "NaN", "longitude": "0"})
    assert resp.status_code == 200
    assert forwarder.urls == [f"{GISMETEO_BASE_URL}/current/?latitude=nan&longitude=0"]


@pytest.mark.parametrize("latitude", ["abc", ""])
def test_unparseable_coordinate_returns_400(settings, forwarder, latitude):
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get("/api/weather/bsp_abcd", params={"latitude": latitude})
    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text.startswith("latitude:")
    assert forwarder.urls == []


def test_upstream_status_is_propagated(settings):
    forwarder = RecordingForwarder(
        ProxyFailure(kind=FailureKind.UPSTREAM_HTTP_ERROR, status=404, message="upstream says no")
    )
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get("/api/weather/bsp_qrst")
    assert resp.status_code == 404
    assert resp.text == "upstream says no"


def test_transport_failure_end_to_end(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    forwarder = GismeteoForwarder("t", user_agent="ua", transport=httpx.MockTransport(handler))
    with TestClient(create_app(settings, forwarder)) as client:
        first = client.get("/api/weather/bsp_abcd")
        # The server keeps serving after a transport failure.
        second = client.get("/health")
    assert first.status_code == 500
    assert "Connection refused" in first.text
    assert second.json() == {"status": "ok"}


def test_startup_fails_without_token():
    settings = ProxySettings(gismeteo_token=None, log_dir=None)
    with pytest.raises(MissingCredentialError):
        with TestClient(create_app(settings)):
            pass


def test_startup_builds_forwarder_from_settings(settings):
    app = create_app(settings)
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
    assert isinstance(app.state.forwarder, GismeteoForwarder)
    assert app.state.forwarder.accept_any_certificate is True


def test_token_read_from_environment(monkeypatch):
    monkeypatch.setenv("GISMETEO_TOKEN", "env-token")
    assert ProxySettings().gismeteo_token == "env-token"


def test_swagger_document_lists_weather_routes(settings, forwarder):
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get("/swagger/v1/swagger.json")
    assert resp.status_code == 200
    paths = resp.json()["paths"]
    for route in ("bsp_abcd", "bsp_efgh", "bsp_ijkl", "bsp_mnop", "bsp_qrst"):
        assert f"/api/weather/{route}" in paths


def test_cors_allows_any_origin(settings, forwarder):
    with TestClient(create_app(settings, forwarder)) as client:
        resp = client.get("/health", headers={"Origin": "https://example.org"})
    assert resp.headers["access-control-allow-origin"] == "*"

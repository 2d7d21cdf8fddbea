import pytest

from gismeteo_proxy.schemas import ProxyResult, ProxySuccess
from gismeteo_proxy.settings import ProxySettings


class RecordingForwarder:
    """Forwarder double that records URLs and replays a fixed result."""

    def __init__(self, result: ProxyResult | None = None) -> None:
        self.result = result or ProxySuccess(body='{"kind": "Obs"}')
        self.urls: list[str] = []

    async def fetch(self, url: str) -> ProxyResult:
        self.urls.append(url)
        return self.result


@pytest.fixture
def settings() -> ProxySettings:
    return ProxySettings(gismeteo_token="test-token", log_dir=None, log_level="INFO")


@pytest.fixture
def forwarder() -> RecordingForwarder:
    return RecordingForwarder()

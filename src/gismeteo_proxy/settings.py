"""Proxy server configuration."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(ENV_FILE, override=False)

GISMETEO_BASE_URL = "https://api.gismeteo.net/v3/weather"


class ProxySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GISMETEO_PROXY_",
        env_file=str(ENV_FILE),
        extra="ignore",
        populate_by_name=True,
    )

    host: str = "0.0.0.0"
    port: int = 5100

    gismeteo_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GISMETEO_TOKEN", "GISMETEO_PROXY_GISMETEO_TOKEN"),
    )
    gismeteo_base_url: str = GISMETEO_BASE_URL
    user_agent: str = "gismeteo-proxy/0.1.0"

    # Upstream certificates are not validated unless this is turned off.
    accept_any_certificate: bool = True
    # None keeps the httpx default timeout.
    request_timeout_s: float | None = None

    log_level: str = "DEBUG"
    log_dir: str | None = "logs"
    cors_allow_origins: list[str] = ["*"]


@lru_cache(maxsize=1)
def get_settings() -> ProxySettings:
    return ProxySettings()

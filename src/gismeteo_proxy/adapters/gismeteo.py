"""Gismeteo adapter.

Performs the outbound call and normalizes every outcome into a ProxyResult.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..logging import get_logger
from ..schemas import FailureKind, ProxyFailure, ProxyResult, ProxySuccess
from . import MissingCredentialError

TOKEN_HEADER = "X-Gismeteo-Token"
INTERNAL_ERROR_MESSAGE = "Internal server error"

logger = get_logger("gismeteo")


def _status_message(resp: httpx.Response) -> str:
    return f"Response status code does not indicate success: {resp.status_code} ({resp.reason_phrase})."


class GismeteoForwarder:
    def __init__(
        self,
        token: str | None,
        *,
        user_agent: str,
        accept_any_certificate: bool = True,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token or not token.strip():
            raise MissingCredentialError("GISMETEO_TOKEN")
        self._token = token
        self._user_agent = user_agent
        self._accept_any_certificate = accept_any_certificate
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def accept_any_certificate(self) -> bool:
        return self._accept_any_certificate

    def build_headers(self) -> dict[str, str]:
        return {"User-Agent": self._user_agent, TOKEN_HEADER: self._token}

    def _client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "headers": self.build_headers(),
            # Certificate chain and hostname checks are skipped entirely when set.
            "verify": not self._accept_any_certificate,
        }
        if self._timeout_s is not None:
            options["timeout"] = self._timeout_s
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def fetch(self, url: str) -> ProxyResult:
        """Issue a single GET against the upstream and map the outcome."""
        logger.debug("upstream_request", extra={"extra": {"url": url}})
        try:
            # Fresh client per call; nothing is pooled between requests.
            async with httpx.AsyncClient(**self._client_options()) as client:
                resp = await client.get(url)
            if not resp.is_success:
                return ProxyFailure(
                    kind=FailureKind.UPSTREAM_HTTP_ERROR,
                    status=resp.status_code or 500,
                    message=_status_message(resp),
                )
            return ProxySuccess(body=resp.text)
        except httpx.RequestError as exc:
            return ProxyFailure(
                kind=FailureKind.TRANSPORT_ERROR,
                status=500,
                message=f"{type(exc).__name__}: {exc}",
            )
        except Exception:  # noqa: BLE001
            logger.exception("upstream_unexpected_error", extra={"extra": {"url": url}})
            return ProxyFailure(
                kind=FailureKind.UNEXPECTED,
                status=500,
                message=INTERNAL_ERROR_MESSAGE,
            )

"""External API adapters."""

from __future__ import annotations


class AdapterError(RuntimeError):
    def __init__(self, code: str, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class MissingCredentialError(AdapterError):
    """Raised at construction time when the upstream token is not configured."""

    def __init__(self, setting: str) -> None:
        super().__init__("MISSING_API_KEY", f"{setting} is not set", {"setting": setting})

"""Structured logging helpers.

Events are logged as short names with fields passed via
``extra={"extra": {...}}`` and rendered as one JSON object per line.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "gismeteo_proxy"
LOG_FILE_NAME = "weather-api.txt"

_configured = False


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            payload.update(fields)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO", log_dir: str | None = None) -> None:
    """Attach console (and optionally daily rotating file) handlers once."""
    global _configured
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level.upper())
    if _configured:
        return

    formatter = JsonFormatter()
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        # Rotated files get a date suffix, e.g. weather-api.txt.2026-10-19
        file_handler = TimedRotatingFileHandler(
            Path(log_dir) / LOG_FILE_NAME,
            when="midnight",
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")

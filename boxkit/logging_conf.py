"""JSON-line logging for the SDK and its CLI.

Library code only calls get_logger(); handlers are attached by the CLI (or the
host application) via setup_logging(). setup_logging() is idempotent: calling
it multiple times won't duplicate handlers.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord carries; anything else arrived through `extra`.
_RESERVED = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

# Transport loggers that should share our handler instead of printing their own.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter.

    - Produces one JSON object per line.
    - Includes ts, level, logger, message and any structured extras passed via
      `logger.info("msg", extra={...})`.
    - Values json can't encode are rendered with str().
    """

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
        }

        msg = record.msg
        if isinstance(msg, dict):
            payload.update(msg)
        else:
            payload["message"] = record.getMessage()

        for key, value in record.__dict__.items():
            if key in _RESERVED or key in payload:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _make_stream_handler(level: int) -> Handler:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def setup_logging(level: str | int = _DEFAULT_LEVEL) -> None:
    """Configure the root logger for JSON output on stderr.

    stdout is left to command output. The httpx/httpcore loggers are pinned to
    WARNING unless DEBUG is requested, since they log every request at INFO.
    """
    root = logging.getLogger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if root.handlers:
        return

    root.setLevel(level)
    root.addHandler(_make_stream_handler(level))

    for name in _TRANSPORT_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(level if level <= logging.DEBUG else logging.WARNING)
        lg.propagate = True
        for h in list(lg.handlers):
            lg.removeHandler(h)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger.

    Usage: logger = get_logger(__name__)
    """
    return logging.getLogger(name if name else __name__)

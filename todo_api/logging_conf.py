"""JSON-lines logging for the API process.

Each record becomes one JSON object carrying `ts`, `level`, `logger`,
`message` and whatever structured fields were passed via `extra={...}`.
Fields whose name looks like a credential are masked before serialization.
setup_logging() is idempotent so repeated app construction in tests does
not stack handlers.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_SENSITIVE_KEYS = frozenset({"password", "token", "x_auth", "authorization"})
_MASK = "***"


class JsonFormatter(logging.Formatter):
    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
        }
        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key in payload:
                continue
            payload[key] = _MASK if key.lower() in _SENSITIVE_KEYS else value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        # ObjectId and datetime values fall back to str()
        return json.dumps(payload, ensure_ascii=False, default=str)


def _make_stream_handler(level: int) -> Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def setup_logging(level: str | int = "INFO") -> None:
    """Attach the JSON handler to the root logger and route uvicorn through it."""
    root = logging.getLogger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if root.handlers:
        return

    root.setLevel(level)
    root.addHandler(_make_stream_handler(level))

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = True
        for h in list(lg.handlers):
            lg.removeHandler(h)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name if name else "todo_api")

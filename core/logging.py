"""
JSON logging for the API process.

Every line is one JSON object. Request-scoped fields (request id, user id) come
from the context variables set in `core.middleware`; event fields are passed as
`extra={"extra_data": {...}}`.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Mapping

from .middleware import principal_ctx_var, request_id_ctx_var

SERVICE_NAME = "asset-maintenance-api"
_RESERVED_KEYS = frozenset({"timestamp", "level", "logger", "message", "service"})


class JsonLogFormatter(logging.Formatter):

    def __init__(self, service: str = SERVICE_NAME, env: str | None = None) -> None:
        super().__init__()
        self.service = service
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service,
        }
        if self.env:
            payload["env"] = self.env
        request_id = request_id_ctx_var.get()
        if request_id:
            payload["request_id"] = request_id
        principal = principal_ctx_var.get()
        if principal:
            payload["principal"] = principal
        extra = getattr(record, "extra_data", None)
        if isinstance(extra, Mapping):
            payload.update({k: v for k, v in extra.items() if k not in _RESERVED_KEYS})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), default=str)


def configure_logging(level: str = "INFO", env: str | None = None) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter(env=env))
    logging.root.handlers = [handler]
    logging.root.setLevel(level.upper())

    # uvicorn logs through the root handler; its access log duplicates request.completed.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

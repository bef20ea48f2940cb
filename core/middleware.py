"""
Per-request context: correlation id, authenticated principal and one access
log line per request.
"""
from __future__ import annotations

import logging
import re
import time
from contextvars import ContextVar
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"

# Client-supplied ids end up in logs; anything else is replaced.
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)
principal_ctx_var: ContextVar[str | None] = ContextVar("principal_id", default=None)
logger = logging.getLogger("app.request")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _REQUEST_ID_RE.match(incoming):
        return incoming
    return uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Tag the request with a correlation id (echoed back in X-Request-ID) and
    log `request.completed` with status, duration and the user id once the
    auth dependency has resolved one.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        id_token = request_id_ctx_var.set(request_id)
        principal_token = principal_ctx_var.set(None)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, request_id, 500, start, "request.failed")
            raise
        finally:
            request_id_ctx_var.reset(id_token)
            principal_ctx_var.reset(principal_token)

        duration_ms = self._log(request, request_id, response.status_code, start, "request.completed")
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers.setdefault(RESPONSE_TIME_HEADER, f"{duration_ms:.2f}ms")
        return response

    @staticmethod
    def _log(request: Request, request_id: str, status_code: int, start: float, event: str) -> float:
        duration_ms = (time.perf_counter() - start) * 1000
        data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "duration_ms": round(duration_ms, 2),
        }
        # Set by get_current_user; request.state is shared with the endpoint.
        principal = getattr(request.state, "principal", None)
        if principal:
            data["principal"] = principal
        level = logging.ERROR if status_code >= 500 else logging.INFO
        logger.log(level, event, extra={"extra_data": data})
        return duration_ms

"""
RecordStore — Request Context Middleware
=========================================

What:  Gives every request an ID and writes one access log line naming the
       record operation it performed.
How:   The ID comes from the client's X-Request-ID header or a short UUID and
       is exposed through `request_id_var` for other loggers. After the
       downstream app has routed the request, the matched endpoint name
       (e.g. `update_record`) and the `record_id` path parameter are read
       back from the ASGI scope and logged on `recordstore.access`.

Access line:
    PUT /api/records/record_1 200 3.2ms op=update_record record=record_1 [a1b2c3d4] from 127.0.0.1

Level by status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
Request bodies are never logged; /health is not logged at all.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

access_logger = logging.getLogger("recordstore.access")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _operation_name(request: Request) -> str:
    """Endpoint function name, or "-" when no route handled the request."""
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", "-")


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request ID propagation plus the per-request record access log."""

    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        if request.url.path not in self.QUIET_PATHS:
            self._log_access(request, response.status_code, started, rid)
        return response

    def _log_access(self, request: Request, status: int, started: float, rid: str) -> None:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        operation = _operation_name(request)
        record_id: Optional[str] = request.scope.get("path_params", {}).get("record_id")
        client_ip = request.client.host if request.client else "unknown"

        access_logger.log(
            _status_level(status),
            "%s %s %d %.1fms op=%s record=%s [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            operation,
            record_id or "-",
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "operation": operation,
                "record_id": record_id,
                "status": status,
                "duration_ms": duration_ms,
            },
        )

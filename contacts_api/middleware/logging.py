"""
Contacts API — Access Logging Middleware
==========================================

One log line per request on the ``contacts_api.access`` logger:

    GET /contacts/64b7f0c2a1e4b5d6c7f8a9b0 404 3.2ms [3f2a9c1e] from 10.0.0.7

Level follows the status class: 5xx → ERROR, 4xx → WARNING, else INFO.
Request bodies are never logged (contacts hold personal data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from contacts_api.middleware.request_id import request_id_var

logger = logging.getLogger("contacts_api.access")

# Probed every few seconds by orchestrators
SKIPPED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response

"""HTTP middleware for request correlation and access logging.

Every request/response pair carries a request id (taken from the incoming
``X-Request-ID`` header or generated) and a duration header, and produces one
``http.request`` log line.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from user_admin.core.config import settings
from user_admin.core.logging import clear_request_id, set_request_id

logger = logging.getLogger("user_admin.access")


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate a correlation id and time the request.

    The id is stored in contextvars for the duration of the request so that
    service and store logs carry it, then echoed back in the response.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        The downstream response with request id and duration headers added.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http.request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response

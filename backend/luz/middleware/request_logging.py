"""
Pure ASGI request logging middleware.

Assigns every HTTP request an id (or keeps the caller's ``X-Request-ID``),
exposes it to log records through the request context, logs the outcome
and records HTTP metrics.
"""

import logging
import time
import uuid

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.request_context import reset_request_id, set_request_id
from ..core.ulid_helper import is_valid_ulid
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SKIP_PATHS = frozenset({"/health", "/metrics"})


def normalize_path(raw_path: str) -> str:
    """Collapse identifiers so metric labels stay bounded: /bookings/01H.. -> /bookings/:id"""
    return "/".join(
        ":id" if segment.isdigit() or is_valid_ulid(segment) else segment
        for segment in raw_path.split("/")
    )


class RequestLoggingMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        method = scope.get("method", "")
        request_id = Headers(scope=scope).get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = set_request_id(request_id)
        start_time = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = MutableHeaders(scope=message)
                headers[REQUEST_ID_HEADER] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            duration = time.perf_counter() - start_time
            logger.exception(f"{method} {path} failed after {duration * 1000:.2f}ms")
            raise
        else:
            duration = time.perf_counter() - start_time
            if path not in SKIP_PATHS:
                message = f"{method} {path} -> {status_code} ({duration * 1000:.2f}ms)"
                if status_code >= 400:
                    logger.warning(message)
                else:
                    logger.info(message)
        finally:
            if path not in SKIP_PATHS:
                prometheus_metrics.record_http_request(
                    method=method,
                    endpoint=normalize_path(path),
                    duration=time.perf_counter() - start_time,
                    status_code=status_code,
                )
            reset_request_id(token)

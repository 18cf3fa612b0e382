"""Request logging and request-id middleware.

Every request gets an ``X-Request-ID`` bound into the structlog context,
and one ``request_started`` / ``request_completed`` pair of events.
"""

import time
import uuid
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

DEFAULT_EXCLUDED_PATHS = [
    "/health/live",
    "/health/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
]


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request state, the log context and the response."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        request.state.trace_id = request_id  # read by the error handlers

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "user_id")

        response.headers["X-Request-ID"] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request.

    The log level follows the response status: errors for 5xx,
    warnings for 4xx (denied permissions show up here), info otherwise.
    """

    def __init__(
        self,
        app: Any,
        exclude_paths: list[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            exclude_paths: Path prefixes that are not logged (health checks, docs)
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or DEFAULT_EXCLUDED_PATHS

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        log_data: dict[str, Any] = {
            "method": method,
            "path": path,
            "client_ip": get_client_ip(request),
        }
        if request.url.query:
            log_data["query"] = str(request.url.query)

        logger.info("request_started", **log_data)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                method=method,
                path=path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=str(exc),
            )
            raise

        completion_data: dict[str, Any] = {
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
        }

        # Set by the authentication dependency once the user is resolved
        user_id = getattr(request.state, "user_id", None)
        if user_id:
            completion_data["user_id"] = str(user_id)

        if response.status_code >= 500:
            logger.error("request_completed", **completion_data)
        elif response.status_code >= 400:
            logger.warning("request_completed", **completion_data)
        else:
            logger.info("request_completed", **completion_data)

        return response


def get_client_ip(request: Request) -> str | None:
    """Extract the real client IP, honouring X-Forwarded-For and X-Real-IP."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # The first entry is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return None

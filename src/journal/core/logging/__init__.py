"""Logging module with structured logging and request tracking."""

from journal.core.logging.middleware import RequestIdMiddleware, RequestLoggingMiddleware


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
]

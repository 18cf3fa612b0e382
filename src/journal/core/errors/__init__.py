"""Error handling module with RFC 7807 Problem Details."""

from journal.core.errors.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from journal.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    "ConflictError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "ProblemDetail",
    "UnauthorizedError",
    "ValidationError",
    "register_exception_handlers",
]

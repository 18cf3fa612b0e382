"""RFC 7807 Problem Details exception handlers.

Every error leaving the API, whether raised by a service, by request
validation or by an unexpected failure, is rendered in the same
Problem Details shape.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from journal.config import settings
from journal.core.errors.exceptions import AppException, ValidationError


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """Represents a single field validation error."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: Request path that produced the problem
        errors: Field-level errors (validation failures only)
        trace_id: Request ID for correlating with logs
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None

    model_config = {"extra": "allow"}


def _problem(
    request: Request,
    error_code: str,
    status_code: int,
    detail: str,
    title: str | None = None,
    errors: list[FieldError] | None = None,
) -> dict[str, Any]:
    return ProblemDetail(
        type=f"{settings.api_docs_base_url}/errors/{error_code}",
        title=title or error_code.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        errors=errors,
        trace_id=getattr(request.state, "trace_id", None),
    ).model_dump(exclude_none=True)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException, merging its details into the body."""
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )

    content = _problem(request, exc.error_code, exc.status_code, exc.message)
    for key, value in exc.details.items():
        content.setdefault(key, value)

    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures with one entry per field."""
    errors: list[FieldError] = []

    for error in exc.errors():
        # Drop the "body"/"query" location prefix from the field path
        loc = error.get("loc", ())
        field_parts = [str(part) for part in loc[1:]] if len(loc) > 1 else []
        errors.append(
            FieldError(
                field=".".join(field_parts) or "unknown",
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )

    logger.warning(
        "validation_error",
        path=str(request.url.path),
        error_count=len(errors),
    )

    return JSONResponse(
        status_code=ValidationError.status_code,
        content=_problem(
            request,
            "validation_error",
            ValidationError.status_code,
            "Request validation failed",
            title="Validation Error",
            errors=errors,
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and return a generic 500."""
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_problem(
            request,
            "internal_error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            title="Internal Server Error",
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)

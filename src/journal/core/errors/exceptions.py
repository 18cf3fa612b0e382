"""Domain exceptions for the journal backend.

Services raise these for business-rule violations; the exception handlers
turn them into RFC 7807 Problem Details responses.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested record does not exist.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=str(role_id))
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when a change clashes with existing data.

    Example:
        raise ConflictError("A role with this name already exists", details={"name": name})
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Raised when input passes schema validation but breaks a domain rule.

    Example:
        raise ValidationError(
            "Unknown capabilities",
            errors=[{"field": "permissions", "message": "article.PUBLISH is not valid"}],
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(AppException):
    """Raised when authentication is missing or invalid."""

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when the caller lacks a capability.

    Example:
        raise ForbiddenError(
            "insufficient permissions: missing role.DELETE",
            error_code="permission_denied",
            details={"required_permission": "role.DELETE"},
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class BadRequestError(AppException):
    """Raised for general client errors."""

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400

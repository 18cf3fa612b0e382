"""Permission guards for API routes.

The checker only reports; these dependencies enforce. A denied result is
turned into ``ForbiddenError`` carrying the checker's reason, and the
allowed user is handed on to the route.

Usage:
    @router.delete("/{role_id}")
    async def delete_role(
        role_id: UUID,
        current_user: Annotated[AuthUser, Depends(require_permission("role.DELETE"))],
    ):
        ...
"""

from collections.abc import Awaitable, Callable

import structlog

from journal.core.auth.dependencies import CurrentUser
from journal.core.errors import ForbiddenError
from journal.core.permissions.checker import (
    check_all_permissions,
    check_any_permission,
    check_permission,
    has_system_admin_access,
)
from journal.core.permissions.schemas import (
    AuthUser,
    PermissionContext,
    PermissionResult,
)


logger = structlog.get_logger()

Guard = Callable[[AuthUser], Awaitable[AuthUser]]


def enforce(
    user: AuthUser,
    result: PermissionResult,
    required: list[str],
) -> AuthUser:
    """Raise ForbiddenError for a denied result, otherwise return the user.

    Raises:
        ForbiddenError: If the result is a denial
    """
    if result.allowed:
        if has_system_admin_access(user):
            logger.info(
                "system_admin_bypass",
                user_id=str(user.id),
                permissions=required,
            )
        return user

    logger.warning(
        "permission_denied",
        user_id=str(user.id),
        permissions=required,
        reason=result.reason,
    )
    raise ForbiddenError(
        result.reason,
        error_code="permission_denied",
        details={"required_permissions": required},
    )


def enforce_permission(
    user: AuthUser,
    capability: str,
    context: PermissionContext | None = None,
) -> AuthUser:
    """Check one capability inline, for routes that need an ownership context.

    Raises:
        ForbiddenError: If the user lacks the capability
    """
    return enforce(user, check_permission(user, capability, context), [capability])


def require_permission(capability: str) -> Guard:
    """Dependency factory requiring a single capability.

    Args:
        capability: Capability string, e.g. ``"role.DELETE"``

    Returns:
        Dependency resolving to the authenticated user
    """

    async def guard(current_user: CurrentUser) -> AuthUser:
        return enforce_permission(current_user, capability)

    return guard


def require_any_permission(capabilities: list[str]) -> Guard:
    """Dependency factory requiring at least one of the capabilities."""

    async def guard(current_user: CurrentUser) -> AuthUser:
        result = check_any_permission(current_user, capabilities)
        return enforce(current_user, result, capabilities)

    return guard


def require_all_permissions(capabilities: list[str]) -> Guard:
    """Dependency factory requiring every one of the capabilities."""

    async def guard(current_user: CurrentUser) -> AuthUser:
        result = check_all_permissions(current_user, capabilities)
        return enforce(current_user, result, capabilities)

    return guard

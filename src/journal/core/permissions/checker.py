"""Permission checking logic.

This module decides whether a user may exercise a capability. It is a pure
function of its inputs: the caller passes an already-hydrated user and the
checker does no data fetching, caching or logging of its own. It never
raises; every outcome is a ``PermissionResult``.
"""

from collections.abc import Iterable, Mapping

from journal.core.permissions.catalogue import (
    OWNER_EXCEPTIONS,
    InvalidCapabilityError,
    SystemPermission,
    parse_capability,
)
from journal.core.permissions.schemas import (
    AuthUser,
    EffectivePermissions,
    PermissionContext,
    PermissionResult,
)


NOT_AUTHENTICATED = "not authenticated"
NO_PERMISSIONS_SPECIFIED = "no permissions specified"

ALLOWED = PermissionResult(allowed=True)


def _deny(reason: str, required: str | None) -> PermissionResult:
    return PermissionResult(allowed=False, reason=reason, required=required)


def get_effective_permissions(user: AuthUser) -> frozenset[str]:
    """Union of the user's role capabilities and direct capabilities."""
    return frozenset(user.role.permissions) | frozenset(user.permissions)


def has_system_admin_access(user: AuthUser | None) -> bool:
    """Check whether the user holds ``SYSTEM.ADMIN`` through role or direct grant."""
    if user is None:
        return False
    return SystemPermission.ADMIN.value in get_effective_permissions(user)


def _owns_resource(user: AuthUser, context: PermissionContext) -> bool:
    return (
        context.resource_owner is not None
        and context.resource_owner == context.user_id
        and context.user_id == user.id
    )


def check_permission(
    user: AuthUser | None,
    capability: str,
    context: PermissionContext | None = None,
    owner_exceptions: Mapping[str, frozenset[str]] = OWNER_EXCEPTIONS,
) -> PermissionResult:
    """Check if a user may exercise a capability.

    Evaluation order:
        1. No user: denied as not authenticated.
        2. Malformed or unknown capability: denied, even for system admins.
        3. ``SYSTEM.ADMIN`` among the effective permissions: allowed.
        4. The exact capability: allowed.
        5. ``<resource>.ALL``: allowed.
        6. Owner exception: the context says the user owns the resource
           and the action is listed for the resource in ``owner_exceptions``.
        7. Otherwise denied with the missing capability in the reason.

    Args:
        user: The hydrated user, or None for anonymous requests
        capability: Capability string such as ``"article.UPDATE"``
        context: Optional ownership information for the owner exception
        owner_exceptions: Resource to owner-allowed actions table

    Returns:
        The check result
    """
    if user is None:
        return _deny(NOT_AUTHENTICATED, capability)

    try:
        parsed = parse_capability(capability)
    except InvalidCapabilityError as exc:
        return _deny(str(exc), capability)

    granted = get_effective_permissions(user)

    if SystemPermission.ADMIN.value in granted:
        return ALLOWED

    if capability in granted:
        return ALLOWED

    if parsed.wildcard is not None and parsed.wildcard in granted:
        return ALLOWED

    if (
        context is not None
        and _owns_resource(user, context)
        and parsed.action in owner_exceptions.get(parsed.scope, frozenset())
    ):
        return ALLOWED

    return _deny(f"insufficient permissions: missing {capability}", capability)


def check_all_permissions(
    user: AuthUser | None,
    capabilities: Iterable[str],
    context: PermissionContext | None = None,
) -> PermissionResult:
    """Require every capability; the first denial is returned as-is.

    An empty list is allowed.
    """
    for capability in capabilities:
        result = check_permission(user, capability, context)
        if not result.allowed:
            return result
    return ALLOWED


def check_any_permission(
    user: AuthUser | None,
    capabilities: Iterable[str],
    context: PermissionContext | None = None,
) -> PermissionResult:
    """Require at least one capability. An empty list is denied."""
    required = list(capabilities)
    if not required:
        return _deny(NO_PERMISSIONS_SPECIFIED, None)

    if user is None:
        return _deny(NOT_AUTHENTICATED, " OR ".join(required))

    if any(check_permission(user, c, context).allowed for c in required):
        return ALLOWED

    return _deny(
        f"insufficient permissions: missing one of {', '.join(required)}",
        " OR ".join(required),
    )


def describe_effective_permissions(user: AuthUser) -> EffectivePermissions:
    """Show a user's role, direct and combined capabilities (for admin screens)."""
    return EffectivePermissions(
        role_permissions=sorted(set(user.role.permissions)),
        direct_permissions=sorted(set(user.permissions)),
        all_permissions=sorted(get_effective_permissions(user)),
        has_system_access=has_system_admin_access(user),
    )

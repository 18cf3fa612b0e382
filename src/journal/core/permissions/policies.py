"""Administrative policies built on top of the checker.

These answer questions a single capability cannot: whether one user may
manage another, which roles an administrator may hand out, and which
direct capabilities they may grant.
"""

from collections.abc import Iterable

from journal.core.permissions.catalogue import (
    Action,
    Resource,
    SystemPermission,
    is_system_capability,
    make_capability,
)
from journal.core.permissions.checker import (
    ALLOWED,
    check_permission,
    has_system_admin_access,
)
from journal.core.permissions.schemas import AuthUser, PermissionResult, RoleSnapshot


SELF_MANAGEMENT_DENIED = "Cannot manage your own account through this interface"
SYSTEM_USER_PROTECTED = "Only system administrators can manage system users"
SYSTEM_ROLE_PROTECTED = "Only system administrators can assign system roles"
SYSTEM_ROLE_PERMISSIONS_PROTECTED = (
    "Only system administrators can assign roles with system permissions"
)
SYSTEM_PERMISSIONS_PROTECTED = (
    "Only system administrators can assign system-level permissions"
)


def can_manage_user(actor: AuthUser, target: AuthUser) -> PermissionResult:
    """Check whether ``actor`` may edit, reassign or delete ``target``.

    Nobody manages their own account here. System admins manage everyone
    else; holders of ``SYSTEM.USER_MANAGEMENT`` or ``user.UPDATE`` manage
    everyone except system admins.
    """
    if actor.id == target.id:
        return PermissionResult(allowed=False, reason=SELF_MANAGEMENT_DENIED)

    if has_system_admin_access(actor):
        return ALLOWED

    management = check_permission(actor, SystemPermission.USER_MANAGEMENT.value)
    if not management.allowed:
        management = check_permission(
            actor, make_capability(Resource.USER, Action.UPDATE)
        )
    if not management.allowed:
        return management

    if has_system_admin_access(target):
        return PermissionResult(allowed=False, reason=SYSTEM_USER_PROTECTED)

    return ALLOWED


def can_assign_role(actor: AuthUser, role: RoleSnapshot) -> PermissionResult:
    """Check whether ``actor`` may put a user into ``role``."""
    if has_system_admin_access(actor):
        return ALLOWED

    management = check_permission(actor, SystemPermission.ROLE_MANAGEMENT.value)
    if not management.allowed:
        return management

    if role.is_system:
        return PermissionResult(allowed=False, reason=SYSTEM_ROLE_PROTECTED)

    if any(is_system_capability(p) for p in role.permissions):
        return PermissionResult(
            allowed=False, reason=SYSTEM_ROLE_PERMISSIONS_PROTECTED
        )

    return ALLOWED


def can_manage_permissions(
    actor: AuthUser,
    target: AuthUser | None = None,
    capabilities: Iterable[str] | None = None,
) -> PermissionResult:
    """Check whether ``actor`` may set direct capabilities on ``target``."""
    if has_system_admin_access(actor):
        return ALLOWED

    management = check_permission(actor, SystemPermission.USER_MANAGEMENT.value)
    if not management.allowed:
        return management

    if target is not None:
        manageable = can_manage_user(actor, target)
        if not manageable.allowed:
            return manageable

    if capabilities is not None and any(is_system_capability(c) for c in capabilities):
        return PermissionResult(allowed=False, reason=SYSTEM_PERMISSIONS_PROTECTED)

    return ALLOWED


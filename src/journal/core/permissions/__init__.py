"""Capability-based permission system."""

from journal.core.permissions.catalogue import (
    Action,
    Capability,
    InvalidCapabilityError,
    PermissionOption,
    Resource,
    SystemPermission,
    all_capabilities,
    is_system_capability,
    is_valid_capability,
    list_permission_options,
    make_capability,
    parse_capability,
)
from journal.core.permissions.checker import (
    check_all_permissions,
    check_any_permission,
    check_permission,
    describe_effective_permissions,
    get_effective_permissions,
    has_system_admin_access,
)
from journal.core.permissions.policies import (
    can_assign_role,
    can_manage_permissions,
    can_manage_user,
)
from journal.core.permissions.schemas import (
    AuthUser,
    EffectivePermissions,
    PermissionContext,
    PermissionResult,
    RoleSnapshot,
)


__all__ = [
    # Catalogue
    "Action",
    "Capability",
    "InvalidCapabilityError",
    "PermissionOption",
    "Resource",
    "SystemPermission",
    "all_capabilities",
    "is_system_capability",
    "is_valid_capability",
    "list_permission_options",
    "make_capability",
    "parse_capability",
    # Checker
    "check_all_permissions",
    "check_any_permission",
    "check_permission",
    "describe_effective_permissions",
    "get_effective_permissions",
    "has_system_admin_access",
    # Policies
    "can_assign_role",
    "can_manage_permissions",
    "can_manage_user",
    # Schemas
    "AuthUser",
    "EffectivePermissions",
    "PermissionContext",
    "PermissionResult",
    "RoleSnapshot",
]

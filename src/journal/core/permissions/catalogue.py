"""Permission catalogue.

Capabilities are strings of the form ``resource.ACTION`` (``article.UPDATE``),
``resource.ALL`` for every action on a resource, or ``SYSTEM.<NAME>`` for
system-level rights. Resources, actions and system capabilities are closed
sets; anything outside them is not a capability and never grants access.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel

from journal.core.constants import SUPER_ADMIN_ROLE


SYSTEM_SCOPE = "SYSTEM"


class Resource(StrEnum):
    """Content and administration resources that can be protected."""

    ARTICLE = "article"
    AUTHOR = "author"
    BOARD_ADVISOR = "boardadvisor"
    CALL_FOR_PAPERS = "callforpapers"
    EDITORIAL_BOARD_MEMBER = "editorialboardmember"
    JOURNAL_ISSUE = "journalissue"
    MEDIA = "media"
    NOTIFICATION = "notification"
    ROLE = "role"
    USER = "user"


class Action(StrEnum):
    """CRUD actions; ``ALL`` stands for every action on the resource."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ALL = "ALL"


class SystemPermission(StrEnum):
    """System-level capabilities. ``ADMIN`` allows everything."""

    ADMIN = "SYSTEM.ADMIN"
    USER_MANAGEMENT = "SYSTEM.USER_MANAGEMENT"
    ROLE_MANAGEMENT = "SYSTEM.ROLE_MANAGEMENT"
    SETTINGS = "SYSTEM.SETTINGS"
    ANALYTICS = "SYSTEM.ANALYTICS"
    BACKUP = "SYSTEM.BACKUP"


_RESOURCES = frozenset(r.value for r in Resource)
_ACTIONS = frozenset(a.value for a in Action)
_SYSTEM_PERMISSIONS = frozenset(p.value for p in SystemPermission)


class InvalidCapabilityError(ValueError):
    """Raised when a string is not a capability from the catalogue."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid capability: {value}")


class Capability(NamedTuple):
    """A parsed capability string."""

    scope: str
    action: str

    @property
    def is_system(self) -> bool:
        return self.scope == SYSTEM_SCOPE

    @property
    def wildcard(self) -> str | None:
        """The ``resource.ALL`` capability covering this one, if any."""
        if self.is_system:
            return None
        return f"{self.scope}.{Action.ALL.value}"

    def __str__(self) -> str:
        return f"{self.scope}.{self.action}"


def parse_capability(value: str) -> Capability:
    """Parse and validate a capability string.

    Args:
        value: A string such as ``"article.UPDATE"`` or ``"SYSTEM.ADMIN"``

    Returns:
        The parsed capability

    Raises:
        InvalidCapabilityError: If the string has no single dot separator or
            names a resource, action or system capability outside the catalogue
    """
    scope, sep, action = value.partition(".")
    if not sep or not scope or not action or "." in action:
        raise InvalidCapabilityError(value)

    if scope == SYSTEM_SCOPE:
        if value not in _SYSTEM_PERMISSIONS:
            raise InvalidCapabilityError(value)
    elif scope not in _RESOURCES or action not in _ACTIONS:
        raise InvalidCapabilityError(value)

    return Capability(scope, action)


def is_valid_capability(value: str) -> bool:
    """Check whether a string is a capability from the catalogue."""
    try:
        parse_capability(value)
    except InvalidCapabilityError:
        return False
    return True


def is_system_capability(value: str) -> bool:
    return value.startswith(f"{SYSTEM_SCOPE}.")


def make_capability(resource: Resource, action: Action) -> str:
    """Build the capability string for a resource and action."""
    return f"{resource.value}.{action.value}"


def all_capabilities() -> list[str]:
    """Every capability in the catalogue, resources first then system ones."""
    capabilities = [make_capability(r, a) for r in Resource for a in Action]
    capabilities.extend(p.value for p in SystemPermission)
    return capabilities


# ============================================================
# Listing helpers for the admin forms
# ============================================================

RESOURCE_LABELS: Mapping[str, str] = {
    Resource.ARTICLE.value: "Articles",
    Resource.AUTHOR.value: "Authors",
    Resource.BOARD_ADVISOR.value: "Board Advisors",
    Resource.CALL_FOR_PAPERS.value: "Call for Papers",
    Resource.EDITORIAL_BOARD_MEMBER.value: "Editorial Board",
    Resource.JOURNAL_ISSUE.value: "Journal Issues",
    Resource.MEDIA.value: "Media",
    Resource.NOTIFICATION.value: "Notifications",
    Resource.ROLE.value: "Roles",
    Resource.USER.value: "Users",
}

SYSTEM_LABELS: Mapping[str, tuple[str, str]] = {
    SystemPermission.ADMIN.value: (
        "System Administrator",
        "Unrestricted access to every resource",
    ),
    SystemPermission.USER_MANAGEMENT.value: (
        "User Management",
        "Manage user accounts and their direct permissions",
    ),
    SystemPermission.ROLE_MANAGEMENT.value: (
        "Role Management",
        "Create, edit, assign and delete roles",
    ),
    SystemPermission.SETTINGS.value: ("System Settings", "Change site settings"),
    SystemPermission.ANALYTICS.value: ("Analytics", "View site analytics"),
    SystemPermission.BACKUP.value: ("Backup & Restore", "Back up and restore data"),
}

_ACTION_VERBS = {
    Action.CREATE.value: "Create",
    Action.READ.value: "View",
    Action.UPDATE.value: "Edit",
    Action.DELETE.value: "Delete",
}


class PermissionOption(BaseModel):
    """One selectable capability in the role and user forms."""

    value: str
    label: str
    description: str
    category: str


def list_permission_options() -> list[PermissionOption]:
    """Describe every capability for display, grouped by category."""
    options: list[PermissionOption] = []

    for resource in Resource:
        category = RESOURCE_LABELS[resource.value]
        for action in Action:
            if action is Action.ALL:
                label = f"Full Access to {category}"
                description = f"Create, view, edit and delete {category.lower()}"
            else:
                verb = _ACTION_VERBS[action.value]
                label = f"{verb} {category}"
                description = f"{verb} {category.lower()}"
            options.append(
                PermissionOption(
                    value=make_capability(resource, action),
                    label=label,
                    description=description,
                    category=category,
                )
            )

    for permission in SystemPermission:
        label, description = SYSTEM_LABELS[permission.value]
        options.append(
            PermissionOption(
                value=permission.value,
                label=label,
                description=description,
                category="System",
            )
        )

    return options


# ============================================================
# Policy tables
# ============================================================

# Actions a user may perform on a record they own without the general capability
OWNER_EXCEPTIONS: Mapping[str, frozenset[str]] = {
    Resource.ARTICLE.value: frozenset({Action.READ.value, Action.UPDATE.value}),
    Resource.USER.value: frozenset({Action.READ.value, Action.UPDATE.value}),
}

DEFAULT_ROLE_PERMISSIONS: Mapping[str, tuple[str, ...]] = {
    SUPER_ADMIN_ROLE: (SystemPermission.ADMIN.value,),
    "Admin": (
        SystemPermission.USER_MANAGEMENT.value,
        SystemPermission.ROLE_MANAGEMENT.value,
        "article.ALL",
        "author.ALL",
        "boardadvisor.ALL",
        "callforpapers.ALL",
        "editorialboardmember.ALL",
        "journalissue.ALL",
        "media.ALL",
        "notification.ALL",
    ),
    "Editor": (
        "article.ALL",
        "author.READ",
        "author.CREATE",
        "journalissue.READ",
        "callforpapers.READ",
        "notification.CREATE",
        "notification.READ",
        "notification.UPDATE",
        "media.ALL",
    ),
    "Author": (
        "article.CREATE",
        "article.READ",
        "author.READ",
        "media.CREATE",
        "media.READ",
    ),
    "Reviewer": (
        "article.READ",
        "author.READ",
        "journalissue.READ",
    ),
    "Viewer": (
        "article.READ",
        "author.READ",
        "journalissue.READ",
        "notification.READ",
    ),
}

DEFAULT_ROLE_DESCRIPTIONS: Mapping[str, str] = {
    SUPER_ADMIN_ROLE: "Unrestricted access; bypasses every permission check",
    "Admin": "Manages content, users and roles",
    "Editor": "Edits articles, media and notifications",
    "Author": "Writes articles and uploads media",
    "Reviewer": "Reads articles under review",
    "Viewer": "Read-only access to the admin area",
}

# Roles created as system roles: name fixed, permissions fixed, never deleted
SYSTEM_ROLE_NAMES = frozenset({SUPER_ADMIN_ROLE})

"""Pydantic schemas consumed and produced by the permission checker."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RoleSnapshot(BaseModel):
    """A role as seen by the checker: its name, flags and capabilities."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID | None = None
    name: str
    is_system: bool = False
    permissions: list[str] = Field(default_factory=list)


class AuthUser(BaseModel):
    """The fully-hydrated user produced at the authentication boundary.

    The role is always loaded; nothing downstream refetches it.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str = ""
    email: str = ""
    role: RoleSnapshot
    permissions: list[str] = Field(default_factory=list)


class PermissionContext(BaseModel):
    """Ownership information for a single check."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID | None = None
    resource_owner: UUID | None = None
    resource_id: UUID | None = None


class PermissionResult(BaseModel):
    """Outcome of a permission check.

    Attributes:
        allowed: Whether access is granted
        reason: Why access was denied (None when allowed)
        required: The capability that was checked, on denial
    """

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str | None = None
    required: str | None = None


class EffectivePermissions(BaseModel):
    """Breakdown of where a user's capabilities come from."""

    role_permissions: list[str]
    direct_permissions: list[str]
    all_permissions: list[str]
    has_system_access: bool

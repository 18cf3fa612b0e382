"""Pydantic schemas for role operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_ROLE_NAME_LENGTH,
    MIN_ROLE_NAME_LENGTH,
)
from journal.core.permissions import PermissionOption, is_valid_capability


def validate_capabilities(values: list[str]) -> list[str]:
    """Reject unknown capability strings and drop duplicates, keeping order.

    Raises:
        ValueError: If any value is not a catalogue capability
    """
    invalid = [v for v in values if not is_valid_capability(v)]
    if invalid:
        raise ValueError(f"Invalid capabilities: {', '.join(invalid)}")
    return list(dict.fromkeys(values))


class RoleBase(BaseModel):
    """Base schema for role data."""

    name: str = Field(
        ..., min_length=MIN_ROLE_NAME_LENGTH, max_length=MAX_ROLE_NAME_LENGTH
    )
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)


class RoleCreate(RoleBase):
    """Schema for creating a custom role."""

    permissions: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("permissions")
    @classmethod
    def known_capabilities(cls, v: list[str]) -> list[str]:
        return validate_capabilities(v)


class RoleUpdate(BaseModel):
    """Schema for updating a role. Omitted fields are left unchanged."""

    name: str | None = Field(
        None, min_length=MIN_ROLE_NAME_LENGTH, max_length=MAX_ROLE_NAME_LENGTH
    )
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    permissions: list[str] | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None

    @field_validator("permissions")
    @classmethod
    def known_capabilities(cls, v: list[str] | None) -> list[str] | None:
        return validate_capabilities(v) if v is not None else None


class RoleResponse(RoleBase):
    """Schema for role response data."""

    id: UUID
    is_system: bool
    permissions: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleListResponse(BaseModel):
    """Schema for the role list."""

    items: list[RoleResponse]
    total: int


class PermissionCatalogueResponse(BaseModel):
    """Every grantable capability, labelled and grouped for admin screens."""

    options: list[PermissionOption]

"""Pydantic schemas for user operations."""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from journal.core.constants import (
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from journal.core.permissions import EffectivePermissions
from journal.modules.roles.schemas import validate_capabilities


# ============================================================
# Password Validation
# ============================================================

# Password complexity rules: (regex pattern, human-readable name)
PASSWORD_COMPLEXITY_RULES: list[tuple[str, str]] = [
    (r"[A-Z]", "uppercase letter"),
    (r"[a-z]", "lowercase letter"),
    (r"\d", "digit"),
    (r"[^A-Za-z0-9\s]", "special character"),
]


def validate_password_complexity(password: str) -> str:
    """Validate password meets complexity requirements.

    Raises:
        ValueError: If an uppercase letter, lowercase letter, digit or
            special character is missing
    """
    missing = [
        name
        for pattern, name in PASSWORD_COMPLEXITY_RULES
        if not re.search(pattern, password)
    ]

    if len(missing) == 1:
        raise ValueError(f"Password must contain at least one {missing[0]}")
    if missing:
        raise ValueError(f"Password must contain at least one: {', '.join(missing)}")

    return password


# ============================================================
# User Schemas
# ============================================================


class UserBase(BaseModel):
    """Base schema for user data."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)


class UserCreate(UserBase):
    """Schema for creating a user with a role and optional direct permissions."""

    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    role_id: UUID
    permissions: list[str] = Field(default_factory=list)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        return validate_password_complexity(v)

    @field_validator("permissions")
    @classmethod
    def known_capabilities(cls, v: list[str]) -> list[str]:
        return validate_capabilities(v)


class UserUpdate(BaseModel):
    """Schema for updating profile data."""

    email: EmailStr | None = None
    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    password: str | None = Field(
        None, min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    is_active: bool | None = None

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str | None) -> str | None:
        return validate_password_complexity(v) if v is not None else None


class UserRoleUpdate(BaseModel):
    """Schema for moving a user to another role."""

    role_id: UUID


class UserPermissionsUpdate(BaseModel):
    """Schema for replacing a user's direct permissions."""

    permissions: list[str]

    @field_validator("permissions")
    @classmethod
    def known_capabilities(cls, v: list[str]) -> list[str]:
        return validate_capabilities(v)


class UserRoleSummary(BaseModel):
    """The role embedded in a user response."""

    id: UUID
    name: str
    is_system: bool

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserBase):
    """Schema for user response data."""

    id: UUID
    is_active: bool
    role: UserRoleSummary
    permissions: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CurrentUserResponse(BaseModel):
    """The signed-in user together with where their capabilities come from."""

    user: UserResponse
    effective_permissions: EffectivePermissions


class UserListResponse(BaseModel):
    """Schema for listing users."""

    items: list[UserResponse]
    total: int
    page: int
    page_size: int


# ============================================================
# Authentication Schemas
# ============================================================


class LoginRequest(BaseModel):
    """Schema for email/password login."""

    email: EmailStr
    password: str

"""Factories for users, roles and the authenticated user."""

from datetime import UTC, datetime
from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from journal.core.auth import hash_password
from journal.core.permissions import AuthUser, RoleSnapshot
from journal.modules.roles.models import Role
from journal.modules.users.models import User
from journal.modules.users.schemas import UserCreate


TEST_PASSWORD = "Correct-Horse-42"


class RoleSnapshotFactory(ModelFactory[RoleSnapshot]):
    """Factory for roles as seen by the checker. No permissions by default."""

    __model__ = RoleSnapshot

    @classmethod
    def name(cls) -> str:
        return f"{cls.__faker__.job()} {uuid4().hex[:4]}"

    @classmethod
    def is_system(cls) -> bool:
        return False

    @classmethod
    def permissions(cls) -> list[str]:
        return []


class AuthUserFactory(ModelFactory[AuthUser]):
    """Factory for authenticated users. No permissions by default."""

    __model__ = AuthUser

    @classmethod
    def name(cls) -> str:
        return cls.__faker__.name()

    @classmethod
    def email(cls) -> str:
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def role(cls) -> RoleSnapshot:
        return RoleSnapshotFactory.build()

    @classmethod
    def permissions(cls) -> list[str]:
        return []


class UserCreateFactory(ModelFactory[UserCreate]):
    """Factory for user creation payloads."""

    __model__ = UserCreate

    @classmethod
    def email(cls) -> str:
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def name(cls) -> str:
        return cls.__faker__.name()

    @classmethod
    def password(cls) -> str:
        return TEST_PASSWORD

    @classmethod
    def permissions(cls) -> list[str]:
        return []


def auth_user(
    role_permissions: list[str] | None = None,
    permissions: list[str] | None = None,
    *,
    role_name: str = "Custom",
    is_system: bool = False,
) -> AuthUser:
    """Build an authenticated user from role and direct capabilities."""
    return AuthUserFactory.build(
        role=RoleSnapshotFactory.build(
            name=role_name,
            is_system=is_system,
            permissions=role_permissions or [],
        ),
        permissions=permissions or [],
    )


def super_admin() -> AuthUser:
    return auth_user(["SYSTEM.ADMIN"], role_name="Super Admin", is_system=True)


# ============================================================
# ORM instances (transient, never flushed)
# ============================================================


def build_role(
    name: str = "Editor",
    permissions: list[str] | None = None,
    *,
    is_system: bool = False,
) -> Role:
    now = datetime.now(UTC)
    return Role(
        id=uuid4(),
        name=name,
        description=f"{name} role",
        is_system=is_system,
        permissions=permissions or [],
        created_at=now,
        updated_at=now,
    )


def build_super_admin_role() -> Role:
    return build_role("Super Admin", ["SYSTEM.ADMIN"], is_system=True)


def build_user(
    role: Role | None = None,
    permissions: list[str] | None = None,
    *,
    email: str | None = None,
    password_hash: str = "",
    is_active: bool = True,
) -> User:
    role = role or build_role()
    now = datetime.now(UTC)
    return User(
        id=uuid4(),
        name="Test User",
        email=email or f"user-{uuid4().hex[:8]}@example.com",
        password_hash=password_hash,
        is_active=is_active,
        role_id=role.id,
        role=role,
        permissions=permissions or [],
        created_at=now,
        updated_at=now,
    )


def build_user_with_password(password: str = TEST_PASSWORD, **kwargs) -> User:
    return build_user(password_hash=hash_password(password), **kwargs)

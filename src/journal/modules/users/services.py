"""User service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from journal.config import settings
from journal.core.auth import (
    AccessTokenResponse,
    create_access_token,
    hash_password,
    verify_password,
)
from journal.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from journal.core.permissions import (
    AuthUser,
    PermissionResult,
    RoleSnapshot,
    SystemPermission,
    can_assign_role,
    can_manage_permissions,
    can_manage_user,
)
from journal.modules.roles.models import Role
from journal.modules.roles.repos import RoleRepo
from journal.modules.users.models import User
from journal.modules.users.repos import UserRepo
from journal.modules.users.schemas import LoginRequest, UserCreate, UserUpdate


logger = structlog.get_logger()


def _raise_if_denied(result: PermissionResult, actor: AuthUser, action: str) -> None:
    if result.allowed:
        return
    logger.warning(
        "user_management_denied",
        actor_id=str(actor.id),
        action=action,
        reason=result.reason,
    )
    raise ForbiddenError(result.reason, error_code="permission_denied")


def _is_super_admin_role(role: Role) -> bool:
    return role.is_system and SystemPermission.ADMIN.value in role.permissions


class UserService:
    """Service for user management operations.

    Every mutation runs the management policies against the acting user
    before touching the database.
    """

    def __init__(self, repo: UserRepo, roles: RoleRepo) -> None:
        self.repo = repo
        self.roles = roles

    async def list_users(
        self, page: int = 1, page_size: int = 20
    ) -> tuple[list[User], int]:
        return await self.repo.list_paginated(page=page, page_size=page_size)

    async def get_user(self, user_id: UUID) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=str(user_id),
            )
        return user

    async def _get_role(self, role_id: UUID) -> Role:
        role = await self.roles.get_by_id(role_id)
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=str(role_id),
            )
        return role

    async def _ensure_email_available(self, email: str) -> None:
        if await self.repo.get_by_email(email):
            raise ConflictError(
                "Email already registered",
                error_code="email_exists",
                details={"email": email},
            )

    async def _ensure_not_last_super_admin(self, user: User) -> None:
        """Refuse to leave the system without a super admin.

        Raises:
            ConflictError: If ``user`` is the only active super admin
        """
        if not user.is_active or not _is_super_admin_role(user.role):
            return
        holders = await self.repo.count_by_role(user.role_id, active_only=True)
        if holders <= 1:
            raise ConflictError(
                "Cannot remove the last Super Admin",
                error_code="last_super_admin",
            )

    async def authenticate(self, data: LoginRequest) -> AccessTokenResponse:
        """Exchange email and password for an access token.

        Raises:
            UnauthorizedError: If the credentials are wrong or the account is disabled
        """
        user = await self.repo.get_by_email(data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning("login_failed", email=data.email)
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )
        if not user.is_active:
            raise UnauthorizedError(
                "Account is disabled",
                error_code="account_disabled",
            )

        logger.info("login_succeeded", user_id=str(user.id))
        return AccessTokenResponse(
            access_token=create_access_token(user.id),
            expires_in=settings.access_token_expire_minutes * 60,
        )

    async def create_user(self, data: UserCreate, actor: AuthUser) -> User:
        """Create a user in a role, with optional direct permissions.

        Args:
            data: User creation data
            actor: The administrator creating the user

        Returns:
            The created user

        Raises:
            ConflictError: If the email is taken
            NotFoundError: If the role does not exist
            ForbiddenError: If the actor may not assign the role or permissions
        """
        role = await self._get_role(data.role_id)
        _raise_if_denied(
            can_assign_role(actor, RoleSnapshot.model_validate(role)),
            actor,
            "assign_role",
        )
        if data.permissions:
            _raise_if_denied(
                can_manage_permissions(actor, capabilities=data.permissions),
                actor,
                "grant_permissions",
            )
        await self._ensure_email_available(data.email)

        user = await self.repo.create(
            User(
                name=data.name,
                email=data.email,
                password_hash=hash_password(data.password),
                role_id=role.id,
                permissions=data.permissions,
            )
        )
        logger.info(
            "user_created",
            user_id=str(user.id),
            role_name=role.name,
            actor_id=str(actor.id),
        )
        return user

    async def update_user(
        self, user_id: UUID, data: UserUpdate, actor: AuthUser
    ) -> User:
        """Update profile fields of another user.

        Raises:
            NotFoundError: If user not found
            ForbiddenError: If the actor may not manage the user
            ConflictError: If the new email is taken, or the update would
                deactivate the last super admin
        """
        user = await self.get_user(user_id)
        _raise_if_denied(
            can_manage_user(actor, AuthUser.model_validate(user)),
            actor,
            "update_user",
        )

        if data.email is not None and data.email.lower() != user.email.lower():
            await self._ensure_email_available(data.email)
            user.email = data.email
        if data.name is not None:
            user.name = data.name
        if data.password is not None:
            user.password_hash = hash_password(data.password)
        if data.is_active is not None:
            if not data.is_active:
                await self._ensure_not_last_super_admin(user)
            user.is_active = data.is_active

        user = await self.repo.update(user)
        logger.info("user_updated", user_id=str(user.id), actor_id=str(actor.id))
        return user

    async def assign_role(
        self, user_id: UUID, role_id: UUID, actor: AuthUser
    ) -> User:
        """Move a user to another role.

        Raises:
            NotFoundError: If the user or role does not exist
            ForbiddenError: If the actor may not manage the user or assign the role
            ConflictError: If this would remove the last super admin
        """
        user = await self.get_user(user_id)
        _raise_if_denied(
            can_manage_user(actor, AuthUser.model_validate(user)),
            actor,
            "assign_role",
        )
        role = await self._get_role(role_id)
        _raise_if_denied(
            can_assign_role(actor, RoleSnapshot.model_validate(role)),
            actor,
            "assign_role",
        )

        if role.id == user.role_id:
            return user

        await self._ensure_not_last_super_admin(user)

        previous = user.role.name
        user.role_id = role.id
        user.role = role
        user = await self.repo.update(user)
        logger.info(
            "user_role_changed",
            user_id=str(user.id),
            from_role=previous,
            to_role=role.name,
            actor_id=str(actor.id),
        )
        return user

    async def update_permissions(
        self, user_id: UUID, permissions: list[str], actor: AuthUser
    ) -> User:
        """Replace a user's direct permissions.

        Raises:
            NotFoundError: If user not found
            ForbiddenError: If the actor may not grant these permissions to the user
        """
        user = await self.get_user(user_id)
        _raise_if_denied(
            can_manage_permissions(
                actor, AuthUser.model_validate(user), permissions
            ),
            actor,
            "grant_permissions",
        )

        user.permissions = permissions
        user = await self.repo.update(user)
        logger.info(
            "user_permissions_changed",
            user_id=str(user.id),
            permissions=permissions,
            actor_id=str(actor.id),
        )
        return user

    async def delete_user(self, user_id: UUID, actor: AuthUser) -> None:
        """Delete another user.

        Raises:
            NotFoundError: If user not found
            ForbiddenError: If the actor targets themselves or may not manage the user
            ConflictError: If the user is the last super admin
        """
        user = await self.get_user(user_id)
        _raise_if_denied(
            can_manage_user(actor, AuthUser.model_validate(user)),
            actor,
            "delete_user",
        )
        await self._ensure_not_last_super_admin(user)

        await self.repo.delete(user)
        logger.info("user_deleted", user_id=str(user_id), actor_id=str(actor.id))


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]

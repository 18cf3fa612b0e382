"""Role service for business logic."""

from collections.abc import Iterable
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from journal.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from journal.core.permissions import (
    AuthUser,
    has_system_admin_access,
    is_system_capability,
)
from journal.core.permissions.catalogue import (
    DEFAULT_ROLE_DESCRIPTIONS,
    DEFAULT_ROLE_PERMISSIONS,
    SYSTEM_ROLE_NAMES,
)
from journal.core.permissions.policies import SYSTEM_PERMISSIONS_PROTECTED
from journal.modules.roles.models import Role
from journal.modules.roles.repos import RoleRepo
from journal.modules.roles.schemas import RoleCreate, RoleUpdate
from journal.modules.users.repos import UserRepo


logger = structlog.get_logger()


class RoleService:
    """Service for role management.

    System roles keep their name and permissions and cannot be deleted.
    A role that still has users assigned cannot be deleted either.
    """

    def __init__(self, repo: RoleRepo, users: UserRepo) -> None:
        self.repo = repo
        self.users = users

    async def list_roles(self) -> list[Role]:
        return await self.repo.list_all()

    async def get_role(self, role_id: UUID) -> Role:
        """Get a role by ID.

        Raises:
            NotFoundError: If the role does not exist
        """
        role = await self.repo.get_by_id(role_id)
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=str(role_id),
            )
        return role

    async def _ensure_name_available(self, name: str) -> None:
        existing = await self.repo.get_by_name(name)
        if existing:
            raise ConflictError(
                "A role with this name already exists",
                error_code="role_exists",
                details={"name": name},
            )

    @staticmethod
    def _ensure_grantable(actor: AuthUser, capabilities: Iterable[str]) -> None:
        if has_system_admin_access(actor):
            return
        if any(is_system_capability(c) for c in capabilities):
            raise ForbiddenError(
                SYSTEM_PERMISSIONS_PROTECTED,
                error_code="system_permissions_protected",
            )

    async def create_role(self, data: RoleCreate, actor: AuthUser) -> Role:
        """Create a custom (non-system) role.

        Args:
            data: Role creation data, capabilities already validated
            actor: The user creating the role

        Returns:
            The created role

        Raises:
            ConflictError: If the name is taken
            ForbiddenError: If a non-admin grants system capabilities
        """
        self._ensure_grantable(actor, data.permissions)
        await self._ensure_name_available(data.name)

        role = await self.repo.create(
            Role(
                name=data.name,
                description=data.description,
                is_system=False,
                permissions=data.permissions,
            )
        )
        logger.info(
            "role_created",
            role_id=str(role.id),
            role_name=role.name,
            actor_id=str(actor.id),
        )
        return role

    async def update_role(
        self, role_id: UUID, data: RoleUpdate, actor: AuthUser
    ) -> Role:
        """Update a role's name, description or permissions.

        Raises:
            NotFoundError: If the role does not exist
            BadRequestError: If the name or permissions of a system role change
            ConflictError: If the new name is taken
            ForbiddenError: If a non-admin grants system capabilities
        """
        role = await self.get_role(role_id)

        if data.name is not None and data.name != role.name:
            if role.is_system:
                raise BadRequestError(
                    "Cannot change the name of a system role",
                    error_code="system_role_protected",
                )
            await self._ensure_name_available(data.name)
            role.name = data.name

        if data.permissions is not None and set(data.permissions) != set(
            role.permissions
        ):
            if role.is_system:
                raise BadRequestError(
                    "Cannot change the permissions of a system role",
                    error_code="system_role_protected",
                )
            self._ensure_grantable(actor, data.permissions)
            role.permissions = data.permissions

        if data.description is not None:
            role.description = data.description

        role = await self.repo.update(role)
        logger.info(
            "role_updated",
            role_id=str(role.id),
            actor_id=str(actor.id),
        )
        return role

    async def delete_role(self, role_id: UUID, actor: AuthUser) -> None:
        """Delete a custom role with no users assigned.

        Raises:
            NotFoundError: If the role does not exist
            BadRequestError: If the role is a system role
            ConflictError: If users are still assigned to it
        """
        role = await self.get_role(role_id)

        if role.is_system:
            raise BadRequestError(
                "Cannot delete a system role",
                error_code="system_role_protected",
            )

        user_count = await self.users.count_by_role(role.id)
        if user_count > 0:
            raise ConflictError(
                f"Cannot delete role with {user_count} users assigned. "
                "Reassign users first.",
                error_code="role_in_use",
                details={"user_count": user_count},
            )

        await self.repo.delete(role)
        logger.info(
            "role_deleted",
            role_id=str(role_id),
            role_name=role.name,
            actor_id=str(actor.id),
        )

    async def sync_default_roles(self) -> list[Role]:
        """Create any missing default role. Existing roles are left untouched.

        Returns:
            The roles created by this call
        """
        created: list[Role] = []
        for name, permissions in DEFAULT_ROLE_PERMISSIONS.items():
            if await self.repo.get_by_name(name):
                continue
            role = await self.repo.create(
                Role(
                    name=name,
                    description=DEFAULT_ROLE_DESCRIPTIONS.get(name),
                    is_system=name in SYSTEM_ROLE_NAMES,
                    permissions=list(permissions),
                )
            )
            created.append(role)
            logger.info("default_role_created", role_name=name)
        return created


# Type alias for dependency injection
RoleSvc = Annotated[RoleService, Depends(RoleService)]

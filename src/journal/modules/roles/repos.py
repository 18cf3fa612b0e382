"""Role repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from journal.api.dependencies import DBSession
from journal.modules.roles.models import Role


class RoleRepository:
    """Repository for Role database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, role: Role) -> Role:
        """Persist a new role and return it with its ID populated."""
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return await self.session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        """List every role ordered by name."""
        result = await self.session.execute(select(Role).order_by(Role.name))
        return list(result.scalars().all())

    async def update(self, role: Role) -> Role:
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, role: Role) -> None:
        await self.session.delete(role)
        await self.session.flush()


# Type alias for dependency injection
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]

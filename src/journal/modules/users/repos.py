"""User repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from journal.api.dependencies import DBSession
from journal.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Users are always returned with their role loaded.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID and role populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's UUID

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address (case-insensitive)."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_paginated(
        self,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[User], int]:
        """List users with pagination.

        Args:
            page: Page number (1-indexed)
            page_size: Number of items per page

        Returns:
            Tuple of (users list, total count)
        """
        count_result = await self.session.execute(
            select(func.count()).select_from(User)
        )
        total = count_result.scalar_one()

        offset = (page - 1) * page_size
        stmt = (
            select(User)
            .order_by(User.created_at.desc())
            .offset(offset)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def count_by_role(self, role_id: UUID, *, active_only: bool = False) -> int:
        """Count the users assigned to a role."""
        stmt = select(func.count()).select_from(User).where(User.role_id == role_id)
        if active_only:
            stmt = stmt.where(User.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def update(self, user: User) -> User:
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]

"""User database model."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.constants import (
    MAX_CAPABILITY_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
)
from journal.core.database.base import Base, TimestampMixin, UUIDMixin
from journal.modules.roles.models import Role


class User(Base, UUIDMixin, TimestampMixin):
    """An administrator account of the journal CMS.

    Every user has exactly one role. Direct permissions are granted on top
    of the role and are never subtracted from it.

    Attributes:
        name: Display name
        email: Unique login email
        password_hash: Bcrypt-hashed password
        is_active: Whether the user can log in
        role_id: The assigned role
        permissions: Direct capability strings
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    role_id: Mapped[UUID] = mapped_column(
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    permissions: Mapped[list[str]] = mapped_column(
        ARRAY(String(MAX_CAPABILITY_LENGTH)),
        default=list,
        nullable=False,
    )

    # Always loaded with the user so the checker never refetches it
    role: Mapped[Role] = relationship(Role, lazy="selectin")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

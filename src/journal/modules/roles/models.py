"""Role database model."""

from sqlalchemy import Boolean, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from journal.core.constants import (
    MAX_CAPABILITY_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from journal.core.database.base import Base, TimestampMixin, UUIDMixin


class Role(Base, UUIDMixin, TimestampMixin):
    """A named bundle of capability strings assigned to users.

    Attributes:
        name: Unique role name (e.g. "Editor")
        description: Human-readable description
        is_system: System roles keep their name and permissions and are never deleted
        permissions: Capability strings such as "article.ALL" or "SYSTEM.ADMIN"
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )
    is_system: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    permissions: Mapped[list[str]] = mapped_column(
        ARRAY(String(MAX_CAPABILITY_LENGTH)),
        default=list,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name}, is_system={self.is_system})>"

"""User model."""

from __future__ import annotations

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from coedit_api.models.base import Base, TimestampMixin, generate_uuid7
from coedit_api.models.enums import OrganizationRole


class User(Base, TimestampMixin):
    """User entity.

    Belongs to exactly one organization, fixed at creation. Email is unique
    across all organizations and compared exactly as stored.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid7,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id"),
        nullable=False,
        index=True,
    )
    role: Mapped[OrganizationRole] = mapped_column(
        Enum(OrganizationRole),
        nullable=False,
        default=OrganizationRole.MEMBER,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == OrganizationRole.ADMIN

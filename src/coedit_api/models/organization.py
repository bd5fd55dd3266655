"""Organization model for multi-tenancy."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from coedit_api.models.base import Base, TimestampMixin, generate_uuid7


class Organization(Base, TimestampMixin):
    """Multi-tenancy root entity.

    Created together with its first (admin) user. Others join with the invite
    code. Never renamed or deleted.
    """

    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid7,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Short uppercase alphanumeric invite code
    code: Mapped[str] = mapped_column(
        String(32),
        unique=True,
        nullable=False,
        index=True,
    )

"""Document model for org-scoped collaborative documents."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from coedit_api.models.base import (
    Base,
    EditTimestampMixin,
    TimestampMixin,
    generate_uuid7,
)


class Document(Base, TimestampMixin, EditTimestampMixin):
    """Document metadata and last-known body snapshot.

    The authoritative collaborative body lives in the document-sync service,
    keyed by this document's id. `content` here is last-writer-wins.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid7,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text)
    # Never changes after creation
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id"),
        nullable=False,
        index=True,
    )
    created_by_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )
    last_edited_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=True,
    )

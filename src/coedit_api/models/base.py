"""Declarative base, id generation and timestamp mixins."""

from datetime import datetime, timezone

import uuid6
from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_uuid7() -> str:
    """Generate a time-ordered UUIDv7 string.

    Ids sort by creation time, which breaks ties between rows created within
    the same timestamp.
    """
    return str(uuid6.uuid7())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Creation instant, set once on insert."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )


class EditTimestampMixin:
    """Instant of the last edit.

    Services stamp it explicitly together with the editor, so no onupdate
    hook is used.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

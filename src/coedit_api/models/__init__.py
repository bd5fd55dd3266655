"""Database models."""

from coedit_api.models.base import Base, TimestampMixin
from coedit_api.models.document import Document
from coedit_api.models.enums import OrganizationRole
from coedit_api.models.organization import Organization
from coedit_api.models.session import Session
from coedit_api.models.user import User

__all__ = [
    "Base",
    "Document",
    "Organization",
    "OrganizationRole",
    "Session",
    "TimestampMixin",
    "User",
]

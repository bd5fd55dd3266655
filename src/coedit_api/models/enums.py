"""Enumeration types for database models."""

import enum


class OrganizationRole(str, enum.Enum):
    """Role of a user within their organization."""

    ADMIN = "admin"  # Creator of the organization; may delete any document
    MEMBER = "member"  # Joined by invite code; read/write on all org documents

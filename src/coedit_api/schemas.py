"""Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from coedit_api.models.enums import OrganizationRole


# --- Auth Schemas ---


class SignUpWithOrganization(BaseModel):
    """Create a new organization and its admin user."""

    email: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    org_name: str = Field(min_length=1, max_length=255)


class SignUpJoinOrganization(BaseModel):
    """Join an existing organization with its invite code."""

    email: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    code: str = Field(min_length=1)


class SignIn(BaseModel):
    """Sign in with email and password."""

    email: str
    password: str


class AuthResponse(BaseModel):
    """Response from sign-up and sign-in."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    token: str
    org_id: str
    name: str


class CurrentUserResponse(BaseModel):
    """The signed-in user and their organization."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: OrganizationRole
    org_id: str
    org_name: str
    org_code: str


# --- Organization Schemas ---


class MemberResponse(BaseModel):
    """Organization member."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: OrganizationRole


# --- Document Schemas ---


class DocumentCreate(BaseModel):
    """Create a document."""

    title: str = Field(min_length=1, max_length=255)


class DocumentCreated(BaseModel):
    """Id of a newly created document."""

    id: str


class DocumentContentUpdate(BaseModel):
    """Replace the stored body snapshot of a document."""

    content: str


class DocumentTitleUpdate(BaseModel):
    """Rename a document."""

    title: str = Field(min_length=1, max_length=255)


class DocumentResponse(BaseModel):
    """Document with creator and last-editor names."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str | None
    organization_id: str
    created_by_id: str
    created_by_name: str
    last_edited_by_id: str | None
    last_edited_by_name: str
    created_at: datetime
    updated_at: datetime


# --- Sync Schemas ---


class SyncAuthorizeRequest(BaseModel):
    """Authorization check requested by the document-sync service."""

    doc_id: str
    access: Literal["read", "write"]

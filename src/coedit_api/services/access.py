"""Authorization gate for org-scoped documents.

Every document operation goes through the same steps:

1. Resolve the bearer token to a user (anonymous -> Unauthorized).
2. Load the document and require it to belong to the user's organization.
   A missing document and another tenant's document are both Unauthorized,
   so tenants cannot discover each other's document ids.
3. For deletion only, require the caller to be the creator or an admin
   (otherwise Forbidden).

The organization is always taken from the resolved user, never from input.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.exceptions import ForbiddenError, UnauthorizedError
from coedit_api.models import Document, User
from coedit_api.services.sessions import resolve_session

logger = logging.getLogger(__name__)


async def require_user(db: AsyncSession, token: str | None) -> User:
    """Resolve a token to a user, raising if there is no live session."""
    user = await resolve_session(db, token)
    if user is None:
        logger.info("Rejected request without a live session")
        raise UnauthorizedError()
    return user


async def get_document_for_user(
    db: AsyncSession, user: User, doc_id: str
) -> Document | None:
    """Load a document if it exists and belongs to the user's organization."""
    document = await db.get(Document, doc_id)
    if document is None or document.organization_id != user.organization_id:
        return None
    return document


async def require_document_access(
    db: AsyncSession, token: str | None, doc_id: str
) -> tuple[User, Document]:
    """Require a live session and an in-tenant document.

    Raises:
        UnauthorizedError: No live session, or the document is missing or
            belongs to another organization
    """
    user = await require_user(db, token)
    document = await get_document_for_user(db, user, doc_id)
    if document is None:
        logger.info("User %s denied access to document %s", user.id, doc_id)
        raise UnauthorizedError()
    return user, document


def can_delete(user: User, document: Document) -> bool:
    return document.created_by_id == user.id or user.is_admin


def require_delete_permission(user: User, document: Document) -> None:
    """Require the user to be the document's creator or an organization admin.

    Raises:
        ForbiddenError: The user is in-tenant but neither creator nor admin
    """
    if not can_delete(user, document):
        logger.warning(
            "User %s is not allowed to delete document %s", user.id, document.id
        )
        raise ForbiddenError()


async def check_read(db: AsyncSession, token: str | None, doc_id: str) -> bool:
    """Whether the token may read a document's collaborative body.

    Called on behalf of the document-sync service before it serves snapshots
    or steps.
    """
    user = await resolve_session(db, token)
    if user is None:
        return False
    return await get_document_for_user(db, user, doc_id) is not None


async def check_write(db: AsyncSession, token: str | None, doc_id: str) -> bool:
    """Whether the token may submit edits to a document's collaborative body.

    Every organization member may write every organization document, so this
    is the same check as reading.
    """
    return await check_read(db, token, doc_id)

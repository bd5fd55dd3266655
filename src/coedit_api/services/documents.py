"""Document registry: org-scoped CRUD over document metadata.

Mutations raise UnauthorizedError/ForbiddenError via the access gate. Reads
never raise for authorization: anonymous callers and documents outside their
organization yield an empty list or None, since subscribing clients may query
before they hold a token.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from coedit_api.models import Document, User
from coedit_api.models.base import utc_now
from coedit_api.services.access import (
    get_document_for_user,
    require_delete_permission,
    require_document_access,
    require_user,
)
from coedit_api.services.document_sync import DocumentSyncABC
from coedit_api.services.sessions import resolve_session

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown"


@dataclass
class DocumentView:
    """A document with creator and last-editor names resolved."""

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


def _document_query():
    creator = aliased(User)
    editor = aliased(User)
    return (
        select(Document, creator.name, editor.name)
        .outerjoin(creator, Document.created_by_id == creator.id)
        .outerjoin(editor, Document.last_edited_by_id == editor.id)
    )


def _to_view(
    document: Document, creator_name: str | None, editor_name: str | None
) -> DocumentView:
    return DocumentView(
        id=document.id,
        title=document.title,
        content=document.content,
        organization_id=document.organization_id,
        created_by_id=document.created_by_id,
        created_by_name=creator_name or UNKNOWN_USER_NAME,
        last_edited_by_id=document.last_edited_by_id,
        last_edited_by_name=editor_name or UNKNOWN_USER_NAME,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


async def create_document(
    db: AsyncSession,
    sync: DocumentSyncABC,
    token: str | None,
    title: str,
) -> str:
    """Create an empty document in the caller's organization.

    The id is registered with the document-sync service before the caller
    commits, so a sync failure leaves no orphaned document behind.

    Returns:
        The new document's id

    Raises:
        UnauthorizedError: No live session
    """
    user = await require_user(db, token)

    now = utc_now()
    document = Document(
        title=title,
        content="",
        organization_id=user.organization_id,
        created_by_id=user.id,
        last_edited_by_id=user.id,
        created_at=now,
        updated_at=now,
    )
    db.add(document)
    await db.flush()

    await sync.create_document(document.id, content="")

    logger.info("User %s created document %s", user.id, document.id)
    return document.id


async def update_document_content(
    db: AsyncSession,
    token: str | None,
    doc_id: str,
    content: str,
) -> None:
    """Store the latest body snapshot of a document (last writer wins).

    Raises:
        UnauthorizedError: No live session, or document not in caller's org
    """
    user, document = await require_document_access(db, token, doc_id)
    document.content = content
    document.last_edited_by_id = user.id
    document.updated_at = utc_now()
    await db.flush()
    logger.debug("User %s updated content of document %s", user.id, doc_id)


async def update_document_title(
    db: AsyncSession,
    token: str | None,
    doc_id: str,
    title: str,
) -> None:
    """Rename a document (last writer wins).

    Raises:
        UnauthorizedError: No live session, or document not in caller's org
    """
    user, document = await require_document_access(db, token, doc_id)
    document.title = title
    document.last_edited_by_id = user.id
    document.updated_at = utc_now()
    await db.flush()
    logger.info("User %s renamed document %s", user.id, doc_id)


async def delete_document(db: AsyncSession, token: str | None, doc_id: str) -> None:
    """Delete a document. Only its creator or an organization admin may.

    Raises:
        UnauthorizedError: No live session, or document not in caller's org
        ForbiddenError: Caller is neither the creator nor an admin
    """
    user, document = await require_document_access(db, token, doc_id)
    require_delete_permission(user, document)
    await db.delete(document)
    await db.flush()
    logger.info("User %s deleted document %s", user.id, doc_id)


async def list_documents(db: AsyncSession, token: str | None) -> list[DocumentView]:
    """List the caller's organization documents, most recently created first."""
    user = await resolve_session(db, token)
    if user is None:
        return []

    result = await db.execute(
        _document_query()
        .where(Document.organization_id == user.organization_id)
        .order_by(Document.created_at.desc(), Document.id.desc())
    )
    return [_to_view(*row) for row in result.all()]


async def get_document(
    db: AsyncSession, token: str | None, doc_id: str
) -> DocumentView | None:
    """Get one document, or None if anonymous or not in the caller's org."""
    user = await resolve_session(db, token)
    if user is None:
        return None

    if await get_document_for_user(db, user, doc_id) is None:
        return None

    result = await db.execute(_document_query().where(Document.id == doc_id))
    row = result.one_or_none()
    if row is None:
        return None
    return _to_view(*row)

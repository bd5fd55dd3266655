"""Document routes, scoped to the caller's organization."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.auth import get_optional_token
from coedit_api.db import get_db
from coedit_api.schemas import (
    DocumentContentUpdate,
    DocumentCreate,
    DocumentCreated,
    DocumentResponse,
    DocumentTitleUpdate,
)
from coedit_api.services import documents as document_service
from coedit_api.services.document_sync import DocumentSyncABC, get_document_sync

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List organization documents, newest first (empty when anonymous)."""
    return await document_service.list_documents(db, token)


@router.post(
    "", response_model=DocumentCreated, status_code=status.HTTP_201_CREATED
)
async def create_document(
    data: DocumentCreate,
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
    sync: Annotated[DocumentSyncABC, Depends(get_document_sync)],
):
    """Create an empty document."""
    doc_id = await document_service.create_document(db, sync, token, data.title)
    await db.commit()
    return DocumentCreated(id=doc_id)


@router.get("/{doc_id}", response_model=DocumentResponse | None)
async def get_document(
    doc_id: str,
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a document, or null if it is not visible to the caller."""
    return await document_service.get_document(db, token, doc_id)


@router.patch("/{doc_id}/content", status_code=status.HTTP_204_NO_CONTENT)
async def update_document_content(
    doc_id: str,
    data: DocumentContentUpdate,
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Store the latest body snapshot."""
    await document_service.update_document_content(db, token, doc_id, data.content)
    await db.commit()


@router.patch("/{doc_id}/title", status_code=status.HTTP_204_NO_CONTENT)
async def update_document_title(
    doc_id: str,
    data: DocumentTitleUpdate,
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Rename a document."""
    await document_service.update_document_title(db, token, doc_id, data.title)
    await db.commit()


@router.delete("/{doc_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    doc_id: str,
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a document (creator or organization admin only)."""
    await document_service.delete_document(db, token, doc_id)
    await db.commit()

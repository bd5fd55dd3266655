"""Authorization hook for the document-sync service.

The sync service forwards the end user's bearer token and asks whether it may
serve (read) or accept (write) collaborative edits for a document.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.auth import get_optional_token
from coedit_api.db import get_db
from coedit_api.schemas import SyncAuthorizeRequest
from coedit_api.services import access as access_service

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/authorize", status_code=status.HTTP_204_NO_CONTENT)
async def authorize(
    data: SyncAuthorizeRequest,
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Allow (204) or deny (401) access to a document's collaborative body."""
    if data.access == "write":
        allowed = await access_service.check_write(db, token, data.doc_id)
    else:
        allowed = await access_service.check_read(db, token, data.doc_id)

    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

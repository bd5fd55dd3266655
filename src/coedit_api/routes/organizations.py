"""Organization routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.auth import get_optional_token
from coedit_api.db import get_db
from coedit_api.schemas import MemberResponse
from coedit_api.services import organizations as organization_service

router = APIRouter(prefix="/organization", tags=["organizations"])


@router.get("/members", response_model=list[MemberResponse])
async def list_members(
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List members of the caller's organization (empty when anonymous)."""
    return await organization_service.list_members(db, token)

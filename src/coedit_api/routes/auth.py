"""Authentication routes: sign-up, sign-in, sign-out and the current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.auth import get_optional_token
from coedit_api.db import get_db
from coedit_api.schemas import (
    AuthResponse,
    CurrentUserResponse,
    SignIn,
    SignUpJoinOrganization,
    SignUpWithOrganization,
)
from coedit_api.services import organizations as organization_service
from coedit_api.services import sessions as session_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup/organization",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up_with_organization(
    data: SignUpWithOrganization,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a new organization. The caller becomes its admin and is signed in."""
    result = await organization_service.create_organization_and_admin(
        db,
        email=data.email,
        name=data.name,
        password=data.password,
        org_name=data.org_name,
    )
    await db.commit()
    return result


@router.post(
    "/signup/join",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up_join_organization(
    data: SignUpJoinOrganization,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Join an existing organization by invite code, as a member."""
    result = await organization_service.join_organization_by_code(
        db,
        email=data.email,
        name=data.name,
        password=data.password,
        code=data.code,
    )
    await db.commit()
    return result


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    data: SignIn,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Sign in and open a new session. Existing sessions stay valid."""
    result = await session_service.sign_in(db, data.email, data.password)
    await db.commit()
    return result


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """End the current session. Succeeds even if there is none."""
    await session_service.sign_out(db, token)
    await db.commit()


@router.get("/me", response_model=CurrentUserResponse | None)
async def get_me(
    token: Annotated[str | None, Depends(get_optional_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the signed-in user and organization, or null when anonymous."""
    return await organization_service.get_current_user(db, token)

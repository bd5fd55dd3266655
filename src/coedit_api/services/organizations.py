"""Organization directory: sign-up into a new or existing organization, members."""

import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.config import invite_code_settings
from coedit_api.exceptions import (
    DuplicateEmailError,
    InvalidInviteCodeError,
    InviteCodeExhaustedError,
)
from coedit_api.models import Organization, OrganizationRole, User
from coedit_api.services.invite_codes import (
    allocate_invite_code,
    normalize_invite_code,
)
from coedit_api.services.passwords import hash_password
from coedit_api.services.sessions import (
    AuthResult,
    create_session,
    get_user_by_email,
    resolve_session,
)

logger = logging.getLogger(__name__)


@dataclass
class MemberSummary:
    """Organization member as shown to other members."""

    id: str
    name: str
    email: str
    role: OrganizationRole


@dataclass
class CurrentUser:
    """The signed-in user together with their organization."""

    id: str
    email: str
    name: str
    role: OrganizationRole
    org_id: str
    org_name: str
    org_code: str


async def _ensure_email_available(db: AsyncSession, email: str) -> None:
    if await get_user_by_email(db, email) is not None:
        raise DuplicateEmailError()


async def _insert_organization(db: AsyncSession, name: str) -> Organization:
    """Insert an organization under a freshly allocated invite code.

    A code taken by a concurrent insert after the availability check is
    retried with a new code, within the same attempt budget.
    """
    for _ in range(invite_code_settings.max_attempts):
        code = await allocate_invite_code(db)
        org = Organization(name=name, code=code)
        db.add(org)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            logger.info("Invite code %s was taken concurrently, retrying", code)
            continue
        return org
    raise InviteCodeExhaustedError()


async def _insert_user(
    db: AsyncSession,
    *,
    email: str,
    name: str,
    password: str,
    organization_id: str,
    role: OrganizationRole,
) -> User:
    user = User(
        email=email,
        name=name,
        password_hash=await asyncio.to_thread(hash_password, password),
        organization_id=organization_id,
        role=role,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # A concurrent sign-up took the email after the pre-check
        await db.rollback()
        raise DuplicateEmailError() from e
    return user


async def create_organization_and_admin(
    db: AsyncSession,
    email: str,
    name: str,
    password: str,
    org_name: str,
) -> AuthResult:
    """Create an organization with the caller as its admin, and sign them in.

    Args:
        db: Database session
        email: Email of the new admin user
        name: Display name of the new admin user
        password: Password of the new admin user
        org_name: Display name of the new organization

    Returns:
        AuthResult with the new user's id, a bearer token and the org id

    Raises:
        DuplicateEmailError: If the email is registered in any organization
        InviteCodeExhaustedError: If no unique invite code could be allocated
    """
    await _ensure_email_available(db, email)

    org = await _insert_organization(db, org_name)
    user = await _insert_user(
        db,
        email=email,
        name=name,
        password=password,
        organization_id=org.id,
        role=OrganizationRole.ADMIN,
    )
    session = await create_session(db, user)

    logger.info("Created organization %s with admin user %s", org.id, user.id)
    return AuthResult(
        user_id=user.id,
        token=session.token,
        org_id=org.id,
        name=user.name,
    )


async def get_organization_by_code(
    db: AsyncSession, code: str
) -> Organization | None:
    result = await db.execute(
        select(Organization).where(Organization.code == normalize_invite_code(code))
    )
    return result.scalar_one_or_none()


async def join_organization_by_code(
    db: AsyncSession,
    email: str,
    name: str,
    password: str,
    code: str,
) -> AuthResult:
    """Sign up as a member of the organization owning an invite code.

    Raises:
        DuplicateEmailError: If the email is registered in any organization
        InvalidInviteCodeError: If no organization has this code (any casing)
    """
    await _ensure_email_available(db, email)

    org = await get_organization_by_code(db, code)
    if org is None:
        raise InvalidInviteCodeError()

    user = await _insert_user(
        db,
        email=email,
        name=name,
        password=password,
        organization_id=org.id,
        role=OrganizationRole.MEMBER,
    )
    session = await create_session(db, user)

    logger.info("User %s joined organization %s", user.id, org.id)
    return AuthResult(
        user_id=user.id,
        token=session.token,
        org_id=org.id,
        name=user.name,
    )


async def list_members(db: AsyncSession, token: str | None) -> list[MemberSummary]:
    """List the members of the caller's organization.

    Returns an empty list for anonymous or expired tokens.
    """
    user = await resolve_session(db, token)
    if user is None:
        return []

    result = await db.execute(
        select(User)
        .where(User.organization_id == user.organization_id)
        .order_by(User.created_at, User.id)
    )
    return [
        MemberSummary(id=m.id, name=m.name, email=m.email, role=m.role)
        for m in result.scalars().all()
    ]


async def get_current_user(db: AsyncSession, token: str | None) -> CurrentUser | None:
    """Get the signed-in user and their organization, or None if anonymous."""
    user = await resolve_session(db, token)
    if user is None:
        return None

    org = await db.get(Organization, user.organization_id)
    if org is None:
        return None

    return CurrentUser(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        org_id=org.id,
        org_name=org.name,
        org_code=org.code,
    )

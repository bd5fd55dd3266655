"""Session service: bearer-token resolution and the sign-in/sign-out lifecycle.

resolve_session is the single authorization entry point. Every other
operation calls it first with the caller's token and treats a None result as
an anonymous caller.
"""

import asyncio
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.config import session_settings
from coedit_api.exceptions import InvalidCredentialsError
from coedit_api.models import Session, User
from coedit_api.models.base import utc_now
from coedit_api.services.passwords import dummy_verify, verify_password

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """Result of a successful sign-up or sign-in."""

    user_id: str
    token: str
    org_id: str
    name: str


def generate_session_token() -> str:
    """Generate an opaque, URL-safe bearer token."""
    return secrets.token_urlsafe(session_settings.token_bytes)


async def create_session(
    db: AsyncSession,
    user: User,
    now: datetime | None = None,
) -> Session:
    """Create a new session for a user.

    Existing sessions of the user are left untouched.

    Args:
        db: Database session
        user: The user the session authenticates as
        now: Creation instant (defaults to the current time)

    Returns:
        The flushed Session, with its token
    """
    now = now or utc_now()
    session = Session(
        token=generate_session_token(),
        user_id=user.id,
        expires_at=now + session_settings.ttl,
    )
    db.add(session)
    await db.flush()
    return session


async def resolve_session(
    db: AsyncSession,
    token: str | None,
    now: datetime | None = None,
) -> User | None:
    """Resolve a bearer token to the user it authenticates.

    Args:
        db: Database session
        token: Bearer token presented by the caller, if any
        now: Instant to check expiry against (defaults to the current time)

    Returns:
        The session's user if the token exists and has not expired,
        None otherwise
    """
    if not token:
        return None

    now = now or utc_now()
    result = await db.execute(
        select(User)
        .join(Session, Session.user_id == User.id)
        .where(Session.token == token)
        .where(Session.expires_at > now)
    )
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def sign_in(db: AsyncSession, email: str, password: str) -> AuthResult:
    """Authenticate with email and password and open a new session.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password (same error
            for both)
    """
    user = await get_user_by_email(db, email)
    if user is None:
        await asyncio.to_thread(dummy_verify, password)
        logger.info("Sign-in rejected")
        raise InvalidCredentialsError()

    if not await asyncio.to_thread(verify_password, password, user.password_hash):
        logger.info("Sign-in rejected")
        raise InvalidCredentialsError()

    session = await create_session(db, user)
    logger.info("User %s signed in", user.id)
    return AuthResult(
        user_id=user.id,
        token=session.token,
        org_id=user.organization_id,
        name=user.name,
    )


async def sign_out(db: AsyncSession, token: str | None) -> None:
    """End the session identified by a token.

    Idempotent: unknown, expired or missing tokens are ignored.
    """
    if not token:
        return

    result = await db.execute(delete(Session).where(Session.token == token))
    if result.rowcount:
        logger.info("Session signed out")


async def purge_expired_sessions(
    db: AsyncSession,
    now: datetime | None = None,
) -> int:
    """Delete sessions past their expiry.

    Storage hygiene only; resolve_session never relies on this having run.
    Exposed as `coedit-api purge-sessions` for an external scheduler.

    Returns:
        Number of sessions deleted
    """
    now = now or utc_now()
    result = await db.execute(delete(Session).where(Session.expires_at <= now))
    count = result.rowcount or 0
    if count:
        logger.info("Purged %d expired session(s)", count)
    return count

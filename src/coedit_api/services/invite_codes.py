"""Organization invite code generation."""

import logging
import secrets

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.config import invite_code_settings
from coedit_api.exceptions import InviteCodeExhaustedError
from coedit_api.models import Organization

logger = logging.getLogger(__name__)


def generate_invite_code() -> str:
    """Generate a random invite code.

    Format: uppercase alphanumeric, e.g. "K7Q2XF"
    """
    alphabet = invite_code_settings.alphabet
    return "".join(
        secrets.choice(alphabet) for _ in range(invite_code_settings.length)
    )


def normalize_invite_code(code: str) -> str:
    """Normalize user input for lookup. Codes are matched case-insensitively."""
    return code.strip().upper()


async def invite_code_exists(db: AsyncSession, code: str) -> bool:
    result = await db.execute(
        select(Organization.id).where(Organization.code == code)
    )
    return result.scalar_one_or_none() is not None


async def allocate_invite_code(db: AsyncSession) -> str:
    """Generate an invite code not used by any organization.

    The unique constraint on organizations.code still guards against a
    concurrent insert of the same code between this check and the insert.

    Raises:
        InviteCodeExhaustedError: If every attempt collided
    """
    for attempt in range(1, invite_code_settings.max_attempts + 1):
        code = generate_invite_code()
        if not await invite_code_exists(db, code):
            return code
        logger.info("Invite code collision on attempt %d, retrying", attempt)

    logger.error(
        "Failed to allocate an invite code after %d attempts",
        invite_code_settings.max_attempts,
    )
    raise InviteCodeExhaustedError()

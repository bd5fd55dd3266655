"""Password credential hashing and verification.

bcrypt is CPU-bound, so async callers run these in a worker thread.
"""

import base64
import hashlib

import bcrypt

from coedit_api.config import password_settings


def _prehash(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes; digest first so long
    # passwords are neither truncated nor rejected
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str) -> str:
    """Hash a password for storage.

    Returns:
        bcrypt hash string with an embedded random salt and cost
    """
    salt = bcrypt.gensalt(rounds=password_settings.bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its stored hash.

    Args:
        password: The password provided by the client
        password_hash: The stored bcrypt hash

    Returns:
        True if the password matches, False otherwise (including a
        malformed stored hash)
    """
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


# Verified against on unknown emails so sign-in timing does not leak whether
# an account exists. Computed lazily to pick up the configured cost.
_dummy_hash: str | None = None


def dummy_verify(password: str) -> None:
    """Spend the same work as a real verification and discard the result."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("coedit-dummy-password")
    verify_password(password, _dummy_hash)

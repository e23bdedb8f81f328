"""Password hashing with bcrypt."""

import bcrypt

from ..config.settings import get_settings

MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes and newer releases reject longer input
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt with a fresh salt.

    Args:
        password: Plain text password
        rounds: Cost factor, defaults to ``BCRYPT_ROUNDS``

    Returns:
        The bcrypt hash as a string
    """
    salt = bcrypt.gensalt(rounds=rounds or get_settings().BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash.

    Returns False for malformed hashes instead of raising.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False

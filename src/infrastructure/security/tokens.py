"""Bearer token issuing and verification with PyJWT."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from pydantic import BaseModel, ValidationError

from ..config.settings import get_settings


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    sub: str
    username: str
    role: str
    exp: datetime
    iat: datetime
    iss: str
    jti: str


def create_access_token(
    user_id: int,
    username: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token for a user.

    Args:
        user_id: User's database ID, stored in the ``sub`` claim
        username: User's username
        role: User's role, checked by the authorization dependencies
        expires_delta: Token lifetime, defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expires = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "iat": now,
        "exp": expires,
        "iss": settings.JWT_ISSUER,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate an access token.

    Returns:
        The token claims, or None if the token is malformed, badly signed,
        expired or issued by someone else.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.PyJWTError:
        return None

    try:
        return TokenPayload(**claims)
    except ValidationError:
        return None

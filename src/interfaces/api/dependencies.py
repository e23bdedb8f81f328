"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import get_settings
from ...infrastructure.database import async_session
from ...infrastructure.logging import get_logger
from ...infrastructure.security import decode_access_token
from ...modules.author.services import AuthorService
from ...modules.book.services import BookService
from ...modules.common.constants import ADMINISTRATOR_ROLE
from ...modules.common.exceptions import AuthenticationError, PermissionDeniedError
from ...modules.user.models import User
from ...modules.user.services import UserService

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(async_session)]

bearer_scheme = HTTPBearer(auto_error=False)
BearerCredentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]


def get_author_service() -> AuthorService:
    """Dependency for providing an AuthorService instance."""
    return AuthorService()


def get_book_service() -> BookService:
    """Dependency for providing a BookService instance."""
    return BookService()


def get_user_service() -> UserService:
    """Dependency for providing a UserService instance."""
    return UserService()


async def get_current_user(
    db: DbSession,
    credentials: BearerCredentials,
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Resolve the caller from its bearer token.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or
            belongs to an account that no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.sub.isdigit():
        logger.warning("Rejected invalid or expired bearer token")
        raise AuthenticationError("Invalid or expired token")

    user = await user_service.get_active_user(int(payload.sub), db)
    if user is None:
        logger.warning(f"Token subject {payload.sub} no longer exists")
        raise AuthenticationError("User not found")

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUser) -> User:
    """Allow only callers holding the Administrator role.

    Raises:
        PermissionDeniedError: If the caller is authenticated but not an administrator
    """
    if user.role != ADMINISTRATOR_ROLE:
        logger.warning(f"{user.username} is not allowed to perform administrator actions")
        raise PermissionDeniedError("Administrator role required")
    return user


async def require_book_editor(
    db: DbSession,
    credentials: BearerCredentials,
    user_service: UserService = Depends(get_user_service),
) -> Optional[User]:
    """Gate book mutations behind authentication when configured to.

    With ``BOOKS_REQUIRE_AUTHENTICATION`` off, anyone may change books and
    this returns None.
    """
    if not get_settings().BOOKS_REQUIRE_AUTHENTICATION:
        return None
    return await get_current_user(db, credentials, user_service)

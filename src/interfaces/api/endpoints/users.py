"""User registration and login endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, status

from ....modules.common.utils.error_handler import raise_http_exception
from ....modules.user.schemas import Token, UserCreate, UserLogin, UserRead
from ....modules.user.services import UserService
from ..dependencies import DbSession, get_user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register User",
    description="""
    Creates a customer account.

    - **username**: Letters, digits, `.`, `_` or `-`
    - **email**: Email address
    - **password**: 8 to 72 characters
    """,
    responses={
        201: {"description": "Account created"},
        400: {"description": "Empty or invalid registration data"},
        409: {"description": "Username or email already registered"},
    },
)
async def register(
    db: DbSession,
    user_data: Annotated[Optional[UserCreate], Body()] = None,
    user_service: UserService = Depends(get_user_service),
) -> UserRead:
    """Register a new user."""
    try:
        return await user_service.register(user_data, db)
    except Exception as e:
        raise_http_exception(e)


@router.post(
    "/login",
    summary="Log In",
    description="Exchanges a username and password for a bearer token.",
    responses={
        200: {"description": "Bearer token"},
        400: {"description": "Empty or invalid credentials payload"},
        401: {"description": "Unknown user or wrong password"},
    },
)
async def login(
    db: DbSession,
    credentials: Annotated[Optional[UserLogin], Body()] = None,
    user_service: UserService = Depends(get_user_service),
) -> Token:
    """Log in and receive an access token."""
    try:
        return await user_service.login(credentials, db)
    except Exception as e:
        raise_http_exception(e)

"""Pydantic schemas for user accounts and tokens."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..common.schemas import TimestampSchema


class UserBase(BaseModel):
    """Base schema for user data."""

    username: Annotated[str, Field(min_length=3, max_length=100, pattern=r"^[A-Za-z0-9_.-]+$")]
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Store email addresses in lowercase."""
        return v.lower()


class UserCreate(UserBase):
    """Schema for registering a new user."""

    password: Annotated[str, Field(min_length=8, max_length=72)]


class UserLogin(BaseModel):
    """Schema for login credentials."""

    username: Annotated[str, Field(min_length=1, max_length=100)]
    password: Annotated[str, Field(min_length=1, max_length=72)]


class UserRead(TimestampSchema):
    """Schema for reading user data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str


class Token(BaseModel):
    """Bearer token returned by a successful login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")

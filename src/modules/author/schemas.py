"""Pydantic schemas for author entities."""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..common.schemas import TimestampSchema


class AuthorBase(BaseModel):
    """Base schema for author data."""

    first_name: Annotated[str, Field(min_length=1, max_length=100, description="Author's first name")]
    last_name: Annotated[str, Field(min_length=1, max_length=100, description="Author's last name")]
    bio: Optional[str] = Field(default=None, max_length=250, description="Short biography")


class AuthorCreate(AuthorBase):
    """Schema for creating a new author."""

    pass


class AuthorUpdate(AuthorBase):
    """Schema for replacing an existing author; ``id`` must match the path."""

    id: int


class AuthorRead(TimestampSchema, AuthorBase):
    """Schema for reading author data."""

    model_config = ConfigDict(from_attributes=True)

    id: int

"""Pydantic schemas for book entities."""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..common.schemas import TimestampSchema


class BookBase(BaseModel):
    """Base schema for book data."""

    title: Annotated[str, Field(min_length=1, max_length=200, description="Book title")]
    year: Optional[int] = Field(default=None, ge=0, le=9999, description="Publication year")
    isbn: Optional[str] = Field(default=None, max_length=50, description="ISBN")
    summary: Optional[str] = Field(default=None, max_length=500, description="Short description")
    image: Optional[str] = Field(default=None, max_length=255, description="Cover image file name")
    price: Optional[float] = Field(default=None, ge=0, description="Price")
    author_id: Optional[int] = Field(default=None, description="Id of the book's author")


class BookCreate(BookBase):
    """Schema for creating a new book."""

    pass


class BookUpdate(BookBase):
    """Schema for replacing an existing book; ``id`` must match the path."""

    id: int


class BookRead(TimestampSchema, BookBase):
    """Schema for reading book data."""

    model_config = ConfigDict(from_attributes=True)

    id: int

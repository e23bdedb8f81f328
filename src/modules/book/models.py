"""SQLAlchemy models for book entities."""

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import TimestampMixin
from ...infrastructure.database.session import Base


class Book(Base, TimestampMixin):
    """A book in the store's catalogue.

    ``author_id`` is optional; when the referenced author is deleted the
    reference is cleared rather than the book removed.
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, init=False)
    title: Mapped[str] = mapped_column(String(200), index=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, default=None)
    isbn: Mapped[Optional[str]] = mapped_column(String(50), default=None)
    summary: Mapped[Optional[str]] = mapped_column(String(500), default=None)
    image: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    price: Mapped[Optional[float]] = mapped_column(Float, default=None)
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("authors.id", ondelete="SET NULL"), index=True, default=None
    )

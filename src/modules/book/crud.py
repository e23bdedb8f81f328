"""CRUD operations for book entities using FastCRUD."""

from fastcrud import FastCRUD

from ..common.repository import CrudRepository
from .models import Book

book_crud: FastCRUD = FastCRUD(Book)


class BookRepository(CrudRepository[Book]):
    """Repository for the ``books`` table."""

    def __init__(self, crud: FastCRUD = book_crud):
        super().__init__(Book, crud)

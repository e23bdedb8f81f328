"""CRUD operations for author entities using FastCRUD."""

from fastcrud import FastCRUD

from ..common.repository import CrudRepository
from .models import Author

author_crud: FastCRUD = FastCRUD(Author)


class AuthorRepository(CrudRepository[Author]):
    """Repository for the ``authors`` table."""

    def __init__(self, crud: FastCRUD = author_crud):
        super().__init__(Author, crud)

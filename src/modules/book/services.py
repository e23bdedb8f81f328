"""Book management service."""

from typing import Optional

from ...infrastructure.logging import get_logger
from ..common.exceptions import BookNotFoundError
from ..common.mapper import EntityMapper
from ..common.services import CrudService, Logger
from .crud import BookRepository
from .models import Book
from .schemas import BookCreate, BookRead, BookUpdate

book_logger = get_logger(__name__)


class BookService(CrudService[Book, BookCreate, BookUpdate, BookRead]):
    """Service for managing the store's books.

    ``author_id`` is stored as given; whether it points at an existing
    author is left to the database's foreign key.
    """

    resource_name = "Book"
    not_found_error = BookNotFoundError

    def __init__(
        self,
        repository: Optional[BookRepository] = None,
        mapper: Optional[EntityMapper[Book, BookRead]] = None,
        logger: Optional[Logger] = None,
    ):
        super().__init__(
            repository=repository or BookRepository(),
            mapper=mapper or EntityMapper(Book, BookRead),
            logger=logger or book_logger,
        )

"""Author management service."""

from typing import Optional

from ...infrastructure.logging import get_logger
from ..common.exceptions import AuthorNotFoundError
from ..common.mapper import EntityMapper
from ..common.services import CrudService, Logger
from .crud import AuthorRepository
from .models import Author
from .schemas import AuthorCreate, AuthorRead, AuthorUpdate

author_logger = get_logger(__name__)


class AuthorService(CrudService[Author, AuthorCreate, AuthorUpdate, AuthorRead]):
    """Service for managing the store's authors.

    Reads are open to everyone; the API layer restricts create, update and
    delete to administrators before any of these methods run.
    """

    resource_name = "Author"
    not_found_error = AuthorNotFoundError

    def __init__(
        self,
        repository: Optional[AuthorRepository] = None,
        mapper: Optional[EntityMapper[Author, AuthorRead]] = None,
        logger: Optional[Logger] = None,
    ):
        super().__init__(
            repository=repository or AuthorRepository(),
            mapper=mapper or EntityMapper(Author, AuthorRead),
            logger=logger or author_logger,
        )

"""Shared request handling for the entity services."""

import logging
from typing import Any, Generic, List, NoReturn, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import DomainError, RepositoryError, ResourceNotFoundError, ValidationError
from .mapper import EntityMapper
from .repository import CrudRepository

ModelType = TypeVar("ModelType")
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)
ReadSchemaType = TypeVar("ReadSchemaType", bound=BaseModel)

Logger = Union[logging.Logger, logging.LoggerAdapter]


class BaseService(Generic[ModelType, ReadSchemaType]):
    """Logging and error conversion shared by every service.

    Log lines follow ``"<ServiceClass> - <action>: <message>"``. Failures
    are reported through domain exceptions; anything unexpected is logged at
    error level and replaced by a ``RepositoryError`` carrying only the
    generic client message.

    Subclasses set ``resource_name`` and ``not_found_error`` and pass their
    repository, mapper and logger to ``__init__``.
    """

    resource_name: str = "Record"
    not_found_error: Type[ResourceNotFoundError] = ResourceNotFoundError

    def __init__(
        self,
        repository: CrudRepository,
        mapper: EntityMapper,
        logger: Logger,
    ):
        self.repository = repository
        self.mapper = mapper
        self.logger = logger

    def _location(self, action: str) -> str:
        return f"{type(self).__name__} - {action}"

    def _attempt_message(self, action: str, entity_id: Optional[Any] = None) -> str:
        return f"{self._location(action)}: Attempted Call"

    def _internal_error(self, message: str) -> NoReturn:
        self.logger.error(message)
        raise RepositoryError()

    def _fault(self, location: str, error: Exception) -> NoReturn:
        self._internal_error(f"{location}: {error} - {error.__cause__ or error.__context__ or ''}")

    def _not_found(self, location: str, entity_id: int) -> NoReturn:
        self.logger.warning(f"{location}: Failed to retrieve record with id: {entity_id}")
        raise self.not_found_error(f"{self.resource_name} with id {entity_id} not found")

    def log_incomplete_request(self, action: str, entity_id: Optional[Any] = None) -> None:
        """Log an ``action`` whose request was rejected before it reached the service."""
        self.logger.info(self._attempt_message(action, entity_id))
        self.logger.warning(f"{self._location(action)}: Data was incomplete")


class CrudService(BaseService[ModelType, ReadSchemaType], Generic[ModelType, CreateSchemaType, UpdateSchemaType, ReadSchemaType]):
    """List, get, create, update and delete for one entity kind.

    Every operation follows the same steps: log the attempt, validate the
    input, call the repository, log the outcome and map the result. Outcomes
    are reported through domain exceptions:

    - ``ValidationError`` for missing, malformed or mismatched input
    - ``not_found_error`` (a ``ResourceNotFoundError``) when the id is unknown
    - ``RepositoryError`` when the repository reports failure or anything
      unexpected is raised; the cause is logged at error level and the
      exception only carries the generic client message
    """

    def _attempt_message(self, action: str, entity_id: Optional[Any] = None) -> str:
        location = self._location(action)
        if action == "create":
            return f"{location}: Create Attempted"
        if action == "update":
            return f"{location}: Update Attempted - id: {entity_id}"
        if action == "delete":
            return f"{location}: Delete Attempted - id: {entity_id}"
        if action == "get":
            return f"{location}: Attempted Call for id: {entity_id}"
        return super()._attempt_message(action, entity_id)

    async def get_all(self, db: AsyncSession) -> List[ReadSchemaType]:
        """Return every record as read views."""
        location = self._location("list")
        try:
            self.logger.info(f"{location}: Attempted Call")
            entities = await self.repository.find_all(db)
            response = self.mapper.to_read_list(entities)
            self.logger.info(f"{location}: Successful")
            return response
        except DomainError:
            raise
        except Exception as e:
            self._fault(location, e)

    async def get_by_id(self, entity_id: int, db: AsyncSession) -> ReadSchemaType:
        """Return one record as a read view."""
        location = self._location("get")
        try:
            self.logger.info(self._attempt_message("get", entity_id))
            entity = await self.repository.find_by_id(entity_id, db)
            if entity is None:
                self._not_found(location, entity_id)
            response = self.mapper.to_read(entity)
            self.logger.info(f"{location}: Successfully got record for id: {entity_id}")
            return response
        except DomainError:
            raise
        except Exception as e:
            self._fault(location, e)

    async def create(self, data: Optional[CreateSchemaType], db: AsyncSession) -> ReadSchemaType:
        """Store a new record and return its read view."""
        location = self._location("create")
        try:
            self.logger.info(self._attempt_message("create"))
            if data is None:
                self.logger.warning(f"{location}: Empty Request was submitted")
                raise ValidationError("Request body is required")

            entity = self.mapper.to_entity(data)
            is_success = await self.repository.create(entity, db)
            if not is_success:
                self._internal_error(f"{location}: Creation Failed")

            self.logger.info(f"{location}: Create Successful")
            return self.mapper.to_read(entity)
        except DomainError:
            raise
        except Exception as e:
            self._fault(location, e)

    async def update(self, entity_id: int, data: Optional[UpdateSchemaType], db: AsyncSession) -> None:
        """Replace the stored fields of an existing record."""
        location = self._location("update")
        try:
            self.logger.info(self._attempt_message("update", entity_id))
            if entity_id < 1 or data is None or entity_id != getattr(data, "id", None):
                self.logger.warning(f"{location}: Update Failed with Bad Data")
                raise ValidationError("Id is invalid or does not match the request body")

            if not await self.repository.exists(entity_id, db):
                self._not_found(location, entity_id)

            is_success = await self.repository.update(entity_id, self.mapper.to_values(data), db)
            if not is_success:
                self._internal_error(f"{location}: Update Failed")

            self.logger.info(f"{location}: Record with id: {entity_id} was successfully updated")
        except DomainError:
            raise
        except Exception as e:
            self._fault(location, e)

    async def delete(self, entity_id: int, db: AsyncSession) -> None:
        """Remove an existing record."""
        location = self._location("delete")
        try:
            self.logger.info(self._attempt_message("delete", entity_id))
            if entity_id < 1:
                self.logger.warning(f"{location}: Delete Failed with Bad Data")
                raise ValidationError("Id must be a positive integer")

            if not await self.repository.exists(entity_id, db):
                self._not_found(location, entity_id)

            entity = await self.repository.find_by_id(entity_id, db)
            is_success = entity is not None and await self.repository.delete(entity, db)
            if not is_success:
                self._internal_error(f"{location}: Delete Failed")

            self.logger.info(f"{location}: Record with id: {entity_id} successfully deleted")
        except DomainError:
            raise
        except Exception as e:
            self._fault(location, e)

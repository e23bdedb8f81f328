"""Mapping between SQLAlchemy entities and pydantic transfer objects."""

from typing import Any, Dict, Generic, Iterable, List, Type, TypeVar

from pydantic import BaseModel

ModelType = TypeVar("ModelType")
ReadSchemaType = TypeVar("ReadSchemaType", bound=BaseModel)


class EntityMapper(Generic[ModelType, ReadSchemaType]):
    """Converts entities to read views and write views to entities.

    Write views may carry an ``id`` (update payloads); it is never copied
    onto the entity since the path id is authoritative.

    Example:
        ```python
        mapper = EntityMapper(Author, AuthorRead)
        author = mapper.to_entity(AuthorCreate(first_name="Mary", last_name="Shelley"))
        mapper.to_read(author)
        ```
    """

    def __init__(self, model: Type[ModelType], read_schema: Type[ReadSchemaType]):
        self.model = model
        self.read_schema = read_schema

    def to_read(self, entity: ModelType) -> ReadSchemaType:
        return self.read_schema.model_validate(entity, from_attributes=True)

    def to_read_list(self, entities: Iterable[ModelType]) -> List[ReadSchemaType]:
        return [self.to_read(entity) for entity in entities]

    def to_values(self, data: BaseModel) -> Dict[str, Any]:
        """Column values for a write view, without its id."""
        return data.model_dump(exclude={"id"})

    def to_entity(self, data: BaseModel) -> ModelType:
        return self.model(**self.to_values(data))

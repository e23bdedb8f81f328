"""Generic repository over SQLAlchemy entities and FastCRUD."""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from fastcrud import FastCRUD
from sqlalchemy import select
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database.session import Base

ModelType = TypeVar("ModelType", bound=Base)


class CrudRepository(Generic[ModelType]):
    """Persistence operations for one entity kind.

    Reads return entities (or None); writes return a success flag. A write
    that affects nothing reports ``False`` instead of raising, so callers can
    tell "the store said no" apart from an actual fault. Faults raised by the
    database roll back the session and propagate.

    Args:
        model: The SQLAlchemy model class
        crud: FastCRUD instance bound to the same model
    """

    def __init__(self, model: Type[ModelType], crud: FastCRUD):
        self.model = model
        self.crud = crud

    async def find_all(self, db: AsyncSession) -> List[ModelType]:
        """Return every entity ordered by id."""
        stmt = select(self.model).order_by(self.model.id).execution_options(populate_existing=True)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def find_by_id(self, entity_id: int, db: AsyncSession) -> Optional[ModelType]:
        """Return the entity with the given id, or None."""
        return await db.get(self.model, entity_id, populate_existing=True)

    async def exists(self, entity_id: int, db: AsyncSession) -> bool:
        return await self.crud.exists(db=db, id=entity_id)

    async def create(self, entity: ModelType, db: AsyncSession) -> bool:
        """Insert a new entity; its generated id is set on success."""
        try:
            db.add(entity)
            await db.commit()
            await db.refresh(entity)
        except SQLAlchemyError:
            await db.rollback()
            raise

        return getattr(entity, "id", None) is not None

    async def update(self, entity_id: int, values: Dict[str, Any], db: AsyncSession) -> bool:
        """Overwrite the columns in ``values`` on the entity with ``entity_id``."""
        try:
            await self.crud.update(db=db, object=values, id=entity_id)
        except NoResultFound:
            return False
        except SQLAlchemyError:
            await db.rollback()
            raise

        return True

    async def delete(self, entity: ModelType, db: AsyncSession) -> bool:
        """Remove a previously loaded entity."""
        try:
            await db.delete(entity)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            raise

        return True

"""CRUD operations for user accounts using FastCRUD."""

from typing import Optional

from fastcrud import FastCRUD
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..common.repository import CrudRepository
from .models import User

user_crud: FastCRUD = FastCRUD(User)


class UserRepository(CrudRepository[User]):
    """Repository for the ``users`` table."""

    def __init__(self, crud: FastCRUD = user_crud):
        super().__init__(User, crud)

    async def find_by_username(self, username: str, db: AsyncSession) -> Optional[User]:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def is_taken(self, username: str, email: str, db: AsyncSession) -> bool:
        """Whether another account already uses the username or the email."""
        result = await db.execute(select(User.id).where(or_(User.username == username, User.email == email)).limit(1))
        return result.first() is not None

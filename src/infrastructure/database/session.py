from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import DatabaseEngineOption, settings


def _engine_options() -> Dict[str, Any]:
    """Build engine keyword arguments for the configured backend.

    SQLite connections do not take pool sizing arguments, so those are only
    passed when running against PostgreSQL.
    """
    options: Dict[str, Any] = {"echo": settings.LOG_SQL_QUERIES, "future": True}
    if settings.DATABASE_ENGINE == DatabaseEngineOption.POSTGRES:
        options["pool_size"] = settings.POSTGRES_POOL_SIZE
        options["max_overflow"] = settings.POSTGRES_MAX_OVERFLOW
    else:
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options())

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Base class for all database models.

    Combines SQLAlchemy's DeclarativeBase with MappedAsDataclass, so every
    entity gets a generated ``__init__``, ``__repr__`` and ``__eq__`` built
    from its mapped columns. Columns declared with ``init=False`` (primary
    keys, timestamps) are filled in by the database or by default factories.

    Example:
        ```python
        class Author(Base):
            __tablename__ = "authors"

            id: Mapped[int] = mapped_column(Integer, primary_key=True, init=False)
            first_name: Mapped[str] = mapped_column(String(100))

        author = Author(first_name="Ursula")
        ```
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database session management.

    Yields one session per request and closes it when the request is done.
    Use it through ``Depends(async_session)``; tests override this callable
    in ``app.dependency_overrides`` to point at their own engine.

    Yields:
        AsyncSession: A configured async database session.
    """
    async_get_db = local_session
    async with async_get_db() as db:
        yield db


async def create_tables() -> None:
    """Create all tables in the database if they don't exist.

    Idempotent: existing tables are left unchanged. Used by the application
    lifespan and by ``scripts/create_tables.py``.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

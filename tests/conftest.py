"""Test configuration and fixtures for the bookstore API."""

import os

# Settings are read at import time, so the test environment goes first.
os.environ["ENVIRONMENT"] = "local"
os.environ["DATABASE_ENGINE"] = "sqlite"
os.environ["SQLITE_URI"] = ":memory:"
os.environ["SQLITE_ASYNC_PREFIX"] = "sqlite+aiosqlite:///"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-bookstore-test-suite"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["ADMIN_USERNAME"] = ""
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import StaticPool  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from src.infrastructure.config.settings import get_settings  # noqa: E402
from src.infrastructure.database.session import Base, async_session  # noqa: E402
from src.infrastructure.logging import configure_testing_logging  # noqa: E402
from src.infrastructure.security import create_access_token  # noqa: E402
from src.interfaces.main import app  # noqa: E402
from src.modules.author.models import Author  # noqa: E402
from src.modules.book.models import Book  # noqa: E402
from src.modules.user.schemas import UserCreate, UserRead  # noqa: E402
from src.modules.user.services import UserService  # noqa: E402

TEST_DATABASE_URL = get_settings().DATABASE_URL

ADMIN_PASSWORD = "admin-password-1"
CUSTOMER_PASSWORD = "customer-password-1"

configure_testing_logging()


@pytest_asyncio.fixture(scope="function")
async def test_db_engine():
    """Create a fresh in-memory database for one test.

    ``StaticPool`` keeps the single in-memory connection alive so that every
    session of the test sees the same tables.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_db_engine):
    return async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(test_session_factory):
    """Create a test client whose requests each get their own session."""
    app.dependency_overrides = {}

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> UserRead:
    """Create an administrator account."""
    return await UserService().ensure_admin("admin", "admin@bookstore.com", ADMIN_PASSWORD, db_session)


@pytest_asyncio.fixture
async def customer_user(db_session: AsyncSession) -> UserRead:
    """Create a customer account."""
    user_data = UserCreate(username="reader", email="reader@bookstore.com", password=CUSTOMER_PASSWORD)
    return await UserService().register(user_data, db_session)


def _auth_headers(user: UserRead) -> dict:
    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: UserRead) -> dict:
    """Bearer headers for the administrator."""
    return _auth_headers(admin_user)


@pytest.fixture
def customer_headers(customer_user: UserRead) -> dict:
    """Bearer headers for the customer."""
    return _auth_headers(customer_user)


@pytest_asyncio.fixture
async def test_author(db_session: AsyncSession) -> dict:
    """Create a test author."""
    author = Author(first_name="Ursula", last_name="Le Guin", bio="Author of Earthsea")
    db_session.add(author)
    await db_session.commit()
    return {
        "id": author.id,
        "first_name": author.first_name,
        "last_name": author.last_name,
        "bio": author.bio,
    }


@pytest_asyncio.fixture
async def test_author_2(db_session: AsyncSession) -> dict:
    """Create a second test author."""
    author = Author(first_name="Terry", last_name="Pratchett")
    db_session.add(author)
    await db_session.commit()
    return {
        "id": author.id,
        "first_name": author.first_name,
        "last_name": author.last_name,
        "bio": author.bio,
    }


@pytest_asyncio.fixture
async def test_book(db_session: AsyncSession, test_author: dict) -> dict:
    """Create a test book written by ``test_author``."""
    book = Book(
        title="A Wizard of Earthsea",
        year=1968,
        isbn="978-0-547-72202-3",
        summary="A young wizard learns the price of power.",
        image="earthsea.jpg",
        price=9.99,
        author_id=test_author["id"],
    )
    db_session.add(book)
    await db_session.commit()
    return {
        "id": book.id,
        "title": book.title,
        "year": book.year,
        "isbn": book.isbn,
        "summary": book.summary,
        "image": book.image,
        "price": book.price,
        "author_id": book.author_id,
    }

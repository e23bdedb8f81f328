"""User registration, login and administrator seeding."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import get_settings
from ...infrastructure.logging import get_logger
from ...infrastructure.security import create_access_token, hash_password, verify_password
from ..common.constants import ADMINISTRATOR_ROLE, CUSTOMER_ROLE
from ..common.exceptions import AuthenticationError, DomainError, UserExistsError, UserNotFoundError, ValidationError
from ..common.mapper import EntityMapper
from ..common.services import BaseService, Logger
from .crud import UserRepository
from .models import User
from .schemas import Token, UserCreate, UserLogin, UserRead

user_logger = get_logger(__name__)


class UserService(BaseService[User, UserRead]):
    """Service for user accounts and bearer tokens.

    Only registration and login are exposed over HTTP. ``get_active_user``
    backs the authentication dependency and ``ensure_admin`` creates the
    configured administrator on startup.
    """

    resource_name = "User"
    not_found_error = UserNotFoundError

    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        mapper: Optional[EntityMapper[User, UserRead]] = None,
        logger: Optional[Logger] = None,
    ):
        super().__init__(
            repository=repository or UserRepository(),
            mapper=mapper or EntityMapper(User, UserRead),
            logger=logger or user_logger,
        )

    async def _create_user(self, username: str, email: str, password: str, role: str, db: AsyncSession) -> User:
        user = User(
            username=username,
            email=email,
            hashed_password=hash_password(password),
            role=role,
        )
        if not await self.repository.create(user, db):
            self._internal_error(f"{self._location('register')}: Creation Failed")
        return user

    async def register(self, data: Optional[UserCreate], db: AsyncSession) -> UserRead:
        """Create a Customer account.

        Raises:
            ValidationError: If no payload was sent
            UserExistsError: If the username or email is already in use
            RepositoryError: If the account could not be stored
        """
        location = self._location("register")
        try:
            if data is None:
                self.logger.warning(f"{location}: Empty Request was submitted")
                raise ValidationError("Request body is required")

            self.logger.info(f"{location}: Registration Attempt for {data.username}")
            if await self.repository.is_taken(data.username, data.email, db):
                self.logger.warning(f"{location}: {data.username} already exists")
                raise UserExistsError("Username or email is already registered")

            user = await self._create_user(data.username, data.email, data.password, CUSTOMER_ROLE, db)
            self.logger.info(f"{location}: Registration Successful for {data.username}")
            return self.mapper.to_read(user)
        except DomainError:
            raise
        except Exception as e:
            self._fault(location, e)

    async def login(self, credentials: Optional[UserLogin], db: AsyncSession) -> Token:
        """Check credentials and issue an access token.

        Raises:
            ValidationError: If no payload was sent
            AuthenticationError: If the user is unknown or the password is wrong
        """
        location = self._location("login")
        try:
            if credentials is None:
                self.logger.warning(f"{location}: Empty Request was submitted")
                raise ValidationError("Request body is required")

            self.logger.info(f"{location}: Login Attempt for {credentials.username}")
            user = await self.repository.find_by_username(credentials.username, db)
            if user is None or not verify_password(credentials.password, user.hashed_password):
                self.logger.warning(f"{location}: {credentials.username} failed to log in")
                raise AuthenticationError("Invalid username or password")

            settings = get_settings()
            access_token = create_access_token(user_id=user.id, username=user.username, role=user.role)
            self.logger.info(f"{location}: {credentials.username} logged in successfully")
            return Token(access_token=access_token, expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60)
        except DomainError:
            raise
        except Exception as e:
            self._fault(location, e)

    async def get_active_user(self, user_id: int, db: AsyncSession) -> Optional[User]:
        """Load the account a token was issued for, or None if it is gone."""
        return await self.repository.find_by_id(user_id, db)

    async def ensure_admin(self, username: str, email: str, password: str, db: AsyncSession) -> Optional[UserRead]:
        """Create the administrator account unless the name or email is taken.

        Returns:
            The created administrator, or None if nothing was created
        """
        location = self._location("seed")
        if await self.repository.is_taken(username, email, db):
            self.logger.debug(f"{location}: {username} already exists")
            return None

        user = await self._create_user(username, email, password, ADMINISTRATOR_ROLE, db)
        self.logger.info(f"{location}: Administrator {username} created")
        return self.mapper.to_read(user)

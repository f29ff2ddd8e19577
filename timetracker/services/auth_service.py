"""Authentication service - business logic for user auth."""
import logging

from pymongo.errors import DuplicateKeyError

from timetracker.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    InvalidInputError,
    NotFoundError,
)
from timetracker.models.user import LoginResponse, User, UserInDB
from timetracker.repositories.user_repository import UserRepository
from timetracker.utils.auth import create_access_token, hash_password, verify_password
from timetracker.utils.day_split import local_now

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = UserRepository(db)

    async def register_user(self, username: str, password: str, name: str) -> User:
        """
        Register a new user.

        Args:
            username: Email address used to log in (trimmed, case-sensitive)
            password: Plain text password
            name: Display name

        Returns:
            User object (without password)

        Raises:
            InvalidInputError: If name or password is blank
            DuplicateEmailError: If the username is already registered
        """
        username = username.strip()
        if not name or not name.strip():
            raise InvalidInputError("name: must not be blank")
        if not password:
            raise InvalidInputError("password: must not be blank")

        if await self.users.exists_by_username(username):
            raise DuplicateEmailError("Email already registered")

        user = UserInDB(
            username=username,
            name=name.strip(),
            hashed_password=hash_password(password),
            created_at=local_now(),
        )

        try:
            saved = await self.users.save(user)
        except DuplicateKeyError:
            raise DuplicateEmailError("Email already registered") from None

        logger.info("Registered user %s", saved.id)
        return User(**saved.model_dump(exclude={"hashed_password"}))

    async def login(self, username: str, password: str) -> LoginResponse:
        """
        Check credentials and issue an access token.

        Raises:
            AuthenticationError: If the username is unknown or the password is wrong
        """
        user = await self.users.find_by_username(username.strip())
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("Rejected login for %s", username.strip())
            raise AuthenticationError(INVALID_CREDENTIALS)

        return LoginResponse(
            id=user.id,
            username=user.username,
            name=user.name,
            access_token=create_access_token(user_id=user.id),
        )

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        return User(**user.model_dump(exclude={"hashed_password"}))

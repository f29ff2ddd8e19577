"""Auth router - API endpoints for authentication."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from timetracker.database import get_database
from timetracker.exceptions import AuthenticationError, NotFoundError
from timetracker.mappers import user_to_response
from timetracker.models.user import LoginRequest, LoginResponse, User, UserCreate, UserResponse
from timetracker.services.auth_service import AuthService
from timetracker.utils.auth import verify_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db=Depends(get_database)):
    """
    Register a new user.

    - Username must be an email address and not yet registered (409)
    """
    service = AuthService(db)
    created_user = await service.register_user(
        username=user.username,
        password=user.password,
        name=user.name,
    )
    return user_to_response(created_user)


@router.post("/login", response_model=LoginResponse)
async def login(login_req: LoginRequest, db=Depends(get_database)):
    """
    Login user and return access token.

    - Invalid credentials return 401 without saying which part was wrong
    """
    service = AuthService(db)
    return await service.login(
        username=login_req.username,
        password=login_req.password,
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db=Depends(get_database),
) -> User:
    """
    Dependency resolving the acting user from the bearer token.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or
            names a user that no longer exists
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    try:
        user_id = verify_access_token(credentials.credentials)
    except JWTError:
        logger.warning("Rejected bearer token")
        raise AuthenticationError("Invalid authentication credentials") from None

    try:
        return await AuthService(db).get_user_by_id(user_id)
    except NotFoundError:
        raise AuthenticationError("Invalid authentication credentials") from None


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return user_to_response(user)

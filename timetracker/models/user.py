"""User model definitions."""
from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, field_validator

from timetracker.models.base import CamelModel


class UserCreate(BaseModel):
    """User registration request."""

    username: str
    name: str
    password: str

    @field_validator("username")
    @classmethod
    def username_is_email(cls, value: str) -> str:
        """Trim the username and require it to look like an email address.

        The address is kept as typed (no case folding); usernames are
        case-sensitive.
        """
        value = value.strip()
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return value


class LoginRequest(BaseModel):
    """Login request model."""

    username: str
    password: str


class User(BaseModel):
    """User record without password."""

    id: Optional[str] = None
    username: str
    name: str
    created_at: datetime


class UserInDB(User):
    """User record with hashed password (for database storage)."""

    hashed_password: str


class UserResponse(CamelModel):
    """User as returned to the client."""

    id: str
    username: str
    name: str
    created_at: datetime


class LoginResponse(CamelModel):
    """Successful login: the user plus a bearer token."""

    id: str
    username: str
    name: str
    access_token: str
    token_type: str = "bearer"

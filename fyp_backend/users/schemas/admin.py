"""
Manager user administration schemas.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr
from pydantic import field_validator

if TYPE_CHECKING:
    from fyp_backend.users.models import User


class UserCreateSchema(Schema):
    """Schema for a manager creating a user."""

    email: EmailStr
    first_name: str
    last_name: str = ""
    roles: list[str]
    password: str | None = None

    @field_validator("roles")
    @classmethod
    def at_least_one_role(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("A user must hold at least one role.")
        return v


class UserUpdateSchema(Schema):
    """Schema for updating a user."""

    first_name: str | None = None
    last_name: str | None = None
    is_active: bool | None = None
    roles: list[str] | None = None


class UserListSchema(Schema):
    """Schema for user list response."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    is_active: bool
    is_superuser: bool
    roles: list[str]
    date_joined: datetime
    last_login: datetime | None

    @staticmethod
    def from_user(user: "User") -> "UserListSchema":
        """Create schema from User model."""
        return UserListSchema(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_active=user.is_active,
            is_superuser=user.is_superuser,
            roles=user.role_names,
            date_joined=user.date_joined,
            last_login=user.last_login,
        )


class UserDeletionSchema(Schema):
    """Rows removed or detached per deletion step."""

    success: bool = True
    summary: dict[str, int]

"""
Session schemas: login payload and the authenticated principal.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr
from pydantic import field_validator

if TYPE_CHECKING:
    from fyp_backend.users.models import User


class LoginSchema(Schema):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class PrincipalSchema(Schema):
    """Who is calling and which roles they act under."""

    id: UUID
    email: str
    full_name: str
    roles: list[str]
    is_active: bool

    @staticmethod
    def from_user(user: "User") -> "PrincipalSchema":
        return PrincipalSchema(
            id=user.id,
            email=user.email,
            full_name=user.get_full_name(),
            roles=user.role_names,
            is_active=user.is_active,
        )


class LoginResponseSchema(Schema):
    success: bool
    user: PrincipalSchema
    csrf_token: str


class CSRFTokenSchema(Schema):
    csrf_token: str

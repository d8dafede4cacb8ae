"""
User schemas for API requests and responses.
"""

from fyp_backend.users.schemas.admin import UserCreateSchema
from fyp_backend.users.schemas.admin import UserDeletionSchema
from fyp_backend.users.schemas.admin import UserListSchema
from fyp_backend.users.schemas.admin import UserUpdateSchema
from fyp_backend.users.schemas.auth import CSRFTokenSchema
from fyp_backend.users.schemas.auth import LoginResponseSchema
from fyp_backend.users.schemas.auth import LoginSchema
from fyp_backend.users.schemas.auth import PrincipalSchema

__all__ = [
    # Auth schemas
    "LoginSchema",
    "PrincipalSchema",
    "LoginResponseSchema",
    "CSRFTokenSchema",
    # Admin schemas
    "UserCreateSchema",
    "UserUpdateSchema",
    "UserListSchema",
    "UserDeletionSchema",
]

"""
Base schemas for the API.
"""

from uuid import UUID

from ninja import Schema


class MessageSchema(Schema):
    """Schema for simple message responses."""

    success: bool = True
    message: str


class UserMinimalSchema(Schema):
    """Minimal user information for references."""

    id: UUID
    first_name: str
    last_name: str
    email: str

    @staticmethod
    def from_user(user) -> "UserMinimalSchema":
        """Create schema from User model."""
        return UserMinimalSchema(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
        )

    @staticmethod
    def from_optional(user) -> "UserMinimalSchema | None":
        return UserMinimalSchema.from_user(user) if user else None

"""
Manager API controller for user administration.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post
from ninja_extra import http_put

from fyp_backend.core.api import BaseAPI
from fyp_backend.core.api import IsManager
from fyp_backend.core.db import get_or_not_found
from fyp_backend.core.exceptions import ErrorSchema
from fyp_backend.users import deletion
from fyp_backend.users import services
from fyp_backend.users.models import User
from fyp_backend.users.schemas import UserCreateSchema
from fyp_backend.users.schemas import UserDeletionSchema
from fyp_backend.users.schemas import UserListSchema
from fyp_backend.users.schemas import UserUpdateSchema


@api_controller("/managers/users", tags=["Users (Manager)"], permissions=[IsManager])
class UserManagementController(BaseAPI):
    """User administration. Requires the Manager role."""

    @http_get(
        "/",
        response={200: list[UserListSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="managers_users_list",
    )
    def list_users(self, request: HttpRequest, role: str | None = None, is_active: bool | None = None):
        """List users, optionally filtered by role or active flag."""
        users = User.objects.prefetch_related("groups").order_by("email")
        if role:
            users = users.filter(groups__name=role).distinct()
        if is_active is not None:
            users = users.filter(is_active=is_active)
        return 200, [UserListSchema.from_user(user) for user in users]

    @http_get(
        "/{user_id}",
        response={200: UserListSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="managers_users_detail",
    )
    def get_user(self, request: HttpRequest, user_id: UUID):
        return 200, UserListSchema.from_user(get_or_not_found(User.objects, "User", id=user_id))

    @http_post(
        "/",
        response={201: UserListSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 409: ErrorSchema},
        url_name="managers_users_create",
    )
    def create_user(self, request: HttpRequest, data: UserCreateSchema):
        """Create a user holding at least one role."""
        user = services.create_user(request.user, **data.model_dump())
        return 201, UserListSchema.from_user(user)

    @http_put(
        "/{user_id}",
        response={200: UserListSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="managers_users_update",
    )
    def update_user(self, request: HttpRequest, user_id: UUID, data: UserUpdateSchema):
        user = services.update_user(request.user, user_id, **data.model_dump(exclude_none=True))
        return 200, UserListSchema.from_user(user)

    @http_delete(
        "/{user_id}",
        response={200: UserDeletionSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        url_name="managers_users_delete",
    )
    def delete_user(self, request: HttpRequest, user_id: UUID):
        """Delete a user and every record that depends on them."""
        return 200, UserDeletionSchema(summary=deletion.delete_user(request.user, user_id))

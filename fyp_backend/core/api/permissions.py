"""
Permission classes for API controllers.
"""

from typing import Any

from django.http import HttpRequest
from ninja_extra import permissions

from fyp_backend.core.roles import Role
from fyp_backend.core.roles import is_manager
from fyp_backend.core.roles import user_has_role


class IsAuthenticated(permissions.BasePermission):
    """
    Permission class that requires an authenticated, active user.
    """

    message = "Authentication required."

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        """Check if the user is authenticated."""
        return bool(
            request.user and request.user.is_authenticated and request.user.is_active
        )


class HasRole(IsAuthenticated):
    """
    Base class for single-role permissions.

    Subclasses set `role`; service functions still re-check roles so the
    engine stays safe when called outside the HTTP layer.
    """

    role: Role
    message = "You do not have the required role."

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        return super().has_permission(request, controller) and user_has_role(
            request.user, self.role
        )


class IsStudent(HasRole):
    role = Role.STUDENT
    message = "Reserved for students."


class IsSupervisor(HasRole):
    role = Role.SUPERVISOR
    message = "Reserved for supervisors."


class IsModerator(HasRole):
    role = Role.MODERATOR
    message = "Reserved for moderators."


class IsExaminer(HasRole):
    role = Role.EXAMINER
    message = "Reserved for examiners."


class IsManager(IsAuthenticated):
    """Managers (or superusers)."""

    message = "Reserved for managers."

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        return super().has_permission(request, controller) and is_manager(request.user)


class AllowAny(permissions.BasePermission):
    """
    Permission class that allows any access.

    Used for public endpoints that don't require authentication.
    """

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        """Always return True."""
        return True

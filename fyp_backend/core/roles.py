"""
Role definitions for the FYP tracker.

Defines the 5 roles used across the platform:
- Student: submits proposals, logs progress, submits reports
- Supervisor: reviews student proposals, proposes projects, reviews progress
- Moderator: gives the final decision on proposals
- Examiner: evaluates projects assigned to them
- Manager: administers users, assigns examiners, archives projects
"""

from enum import Enum

from fyp_backend.core.exceptions import PermissionDeniedError


class Role(str, Enum):
    """
    Enum of available roles.

    Values match Django Group names exactly.
    """

    STUDENT = "Student"
    SUPERVISOR = "Supervisor"
    MODERATOR = "Moderator"
    EXAMINER = "Examiner"
    MANAGER = "Manager"

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        """Return choices for Django form fields."""
        return [(role.value, role.value) for role in cls]

    @classmethod
    def values(cls) -> list[str]:
        """Return all role values."""
        return [role.value for role in cls]


ROLE_DESCRIPTIONS = {
    Role.STUDENT: "Student - Submits proposals, progress logs and reports",
    Role.SUPERVISOR: "Supervisor - Reviews student proposals and supervises projects",
    Role.MODERATOR: "Moderator - Final approval of proposals",
    Role.EXAMINER: "Examiner - Evaluates assigned projects",
    Role.MANAGER: "Manager - Administers users, examiners and the archive",
}


def _role_name(role: Role | str) -> str:
    return role.value if isinstance(role, Role) else role


def get_user_roles(user) -> list[str]:
    """
    Get the list of role names for a user.

    Args:
        user: Django User instance

    Returns:
        List of role names the user belongs to
    """
    if not user or not user.is_authenticated:
        return []

    return list(user.groups.values_list("name", flat=True))


def user_has_role(user, role: Role | str) -> bool:
    """
    Check if a user has a specific role.

    Args:
        user: Django User instance
        role: Role enum value or role name string

    Returns:
        True if user has the role
    """
    if not user or not user.is_authenticated:
        return False

    return user.groups.filter(name=_role_name(role)).exists()


def user_has_any_role(user, roles: list[Role | str]) -> bool:
    """
    Check if a user has any of the specified roles.

    Args:
        user: Django User instance
        roles: List of Role enum values or role name strings

    Returns:
        True if user has at least one of the roles
    """
    if not user or not user.is_authenticated:
        return False

    return user.groups.filter(name__in=[_role_name(r) for r in roles]).exists()


def require_role(user, *roles: Role) -> None:
    """Raise PermissionDeniedError unless the user holds one of the roles."""
    if not user_has_any_role(user, list(roles)):
        names = ", ".join(r.value for r in roles)
        raise PermissionDeniedError(f"This action requires the {names} role.")


def is_manager(user) -> bool:
    """Managers and superusers administer the platform."""
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    return user_has_role(user, Role.MANAGER)


def require_manager(user) -> None:
    if not is_manager(user):
        raise PermissionDeniedError("This action requires the Manager role.")

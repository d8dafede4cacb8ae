"""
User administration services.

Every user holds at least one role; create and update both enforce it.
"""

import logging
import secrets
import string

from django.contrib.auth.models import Group
from django.db import transaction

from fyp_backend.core.db import lock_or_not_found
from fyp_backend.core.exceptions import AlreadyExistsError
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.exceptions import ValidationError
from fyp_backend.core.roles import Role
from fyp_backend.core.roles import require_manager
from fyp_backend.users.models import User

logger = logging.getLogger(__name__)


def generate_temp_password(length: int = 16) -> str:
    """Generate a secure temporary password."""
    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    return "".join(secrets.choice(alphabet) for _ in range(length))


def _role_groups(roles: list[str]) -> list[Group]:
    names = {str(getattr(r, "value", r)) for r in roles}
    if not names:
        raise ValidationError("A user must hold at least one role.", details={"field": "roles"})
    unknown = names - set(Role.values())
    if unknown:
        raise ValidationError(
            f"Unknown role(s): {', '.join(sorted(unknown))}",
            details={"choices": Role.values()},
        )
    groups = []
    for name in sorted(names):
        group, _ = Group.objects.get_or_create(name=name)
        groups.append(group)
    return groups


@transaction.atomic
def create_user(
    manager,
    *,
    email: str,
    first_name: str,
    last_name: str = "",
    roles: list[str],
    password: str | None = None,
    is_active: bool = True,
) -> User:
    require_manager(manager)
    email = User.objects.normalize_email(email.strip())
    if User.objects.filter(email__iexact=email).exists():
        raise AlreadyExistsError("An account with this email already exists.")
    if not first_name or not first_name.strip():
        raise ValidationError("The first name is required.", details={"field": "first_name"})

    groups = _role_groups(roles)
    user = User.objects.create_user(
        email=email,
        password=password or generate_temp_password(),
        first_name=first_name.strip(),
        last_name=(last_name or "").strip(),
        is_active=is_active,
    )
    user.groups.set(groups)
    logger.info("User %s created by %s with roles %s", user.email, manager.email, [g.name for g in groups])
    return user


@transaction.atomic
def update_user(
    manager,
    user_id,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    is_active: bool | None = None,
    roles: list[str] | None = None,
) -> User:
    """Change a user's name, active flag or roles. Only managers toggle is_active."""
    require_manager(manager)
    user = lock_or_not_found(User.objects, "User", id=user_id)
    if user.pk == manager.pk and is_active is False:
        raise PermissionDeniedError("You cannot deactivate your own account.")

    if first_name is not None:
        if not first_name.strip():
            raise ValidationError("The first name is required.", details={"field": "first_name"})
        user.first_name = first_name.strip()
    if last_name is not None:
        user.last_name = last_name.strip()
    if is_active is not None:
        user.is_active = is_active
    user.save()

    if roles is not None:
        user.groups.set(_role_groups(roles))

    logger.info("User %s updated by %s", user.email, manager.email)
    return user

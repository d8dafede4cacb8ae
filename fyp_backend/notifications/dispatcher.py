"""
Notification dispatcher.

Notifications are side effects of business operations: they are written in
the caller's transaction but inside their own savepoint, so a failed insert
is logged and dropped without undoing the operation that triggered it.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from fyp_backend.core.exceptions import NotFoundError
from fyp_backend.core.roles import Role

from .models import EventType
from .models import Notification

logger = logging.getLogger(__name__)


def notify(user, event_type: EventType | str, message: str) -> Notification | None:
    """
    Store a notification for one user.

    Returns the Notification, or None if the insert failed.
    """
    if user is None:
        return None
    try:
        with transaction.atomic():
            notification = Notification.objects.create(
                user=user,
                event_type=event_type,
                message=message,
            )
    except Exception:
        logger.exception("Could not store %s notification for user %s", event_type, user.pk)
        return None

    logger.debug("Notification %s (%s) stored for %s", notification.id, event_type, user.pk)
    return notification


def notify_many(users, event_type: EventType | str, message: str) -> list[Notification]:
    sent = []
    seen = set()
    for user in users:
        if user is None or user.pk in seen:
            continue
        seen.add(user.pk)
        notification = notify(user, event_type, message)
        if notification is not None:
            sent.append(notification)
    return sent


def notify_role(role: Role, event_type: EventType | str, message: str) -> list[Notification]:
    """Fan a notification out to every active holder of a role."""
    User = get_user_model()
    return notify_many(User.objects.with_role(role), event_type, message)


def mark_read(user, notification_id) -> Notification:
    notification = Notification.objects.filter(id=notification_id, user=user).first()
    if notification is None:
        raise NotFoundError("Notification not found.")

    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=["is_read", "modified"])
    return notification


def mark_all_read(user) -> int:
    """Mark every unread notification of the user as read; returns how many changed."""
    return Notification.objects.for_user(user).unread().update(is_read=True)

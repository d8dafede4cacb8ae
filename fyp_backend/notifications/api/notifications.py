"""
Notifications API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from fyp_backend.core.api import BaseAPI
from fyp_backend.core.api import IsAuthenticated
from fyp_backend.core.exceptions import ErrorSchema
from fyp_backend.notifications.dispatcher import mark_all_read
from fyp_backend.notifications.dispatcher import mark_read
from fyp_backend.notifications.models import Notification
from fyp_backend.notifications.schemas import MarkAllReadSchema
from fyp_backend.notifications.schemas import NotificationSchema
from fyp_backend.notifications.schemas import UnreadCountSchema


def notification_to_schema(notification: Notification) -> NotificationSchema:
    return NotificationSchema(
        id=notification.id,
        event_type=notification.event_type,
        message=notification.message,
        is_read=notification.is_read,
        created=notification.created,
    )


@api_controller("/notifications", tags=["Notifications"], permissions=[IsAuthenticated])
class NotificationController(BaseAPI):
    """Read and acknowledge the current user's notifications."""

    @http_get(
        "/",
        response={200: list[NotificationSchema], 401: ErrorSchema},
        url_name="notifications_list",
    )
    def list_notifications(self, request: HttpRequest, unread: bool | None = None):
        notifications = Notification.objects.for_user(request.user)
        if unread:
            notifications = notifications.unread()
        return 200, [notification_to_schema(n) for n in notifications]

    @http_get(
        "/unread-count",
        response={200: UnreadCountSchema, 401: ErrorSchema},
        url_name="notifications_unread_count",
    )
    def unread_count(self, request: HttpRequest):
        count = Notification.objects.for_user(request.user).unread().count()
        return 200, UnreadCountSchema(unread=count)

    @http_post(
        "/{notification_id}/read",
        response={200: NotificationSchema, 401: ErrorSchema, 404: ErrorSchema},
        url_name="notifications_mark_read",
    )
    def read(self, request: HttpRequest, notification_id: UUID):
        return 200, notification_to_schema(mark_read(request.user, notification_id))

    @http_post(
        "/read-all",
        response={200: MarkAllReadSchema, 401: ErrorSchema},
        url_name="notifications_mark_all_read",
    )
    def read_all(self, request: HttpRequest):
        return 200, MarkAllReadSchema(updated=mark_all_read(request.user))

"""
Notification schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema


class NotificationSchema(Schema):
    id: UUID
    event_type: str
    message: str
    is_read: bool
    created: datetime


class UnreadCountSchema(Schema):
    unread: int


class MarkAllReadSchema(Schema):
    updated: int

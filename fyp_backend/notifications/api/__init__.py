"""
Notification API controllers.
"""

from fyp_backend.notifications.api.notifications import NotificationController

__all__ = ["NotificationController"]

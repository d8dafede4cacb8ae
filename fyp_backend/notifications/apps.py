from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class NotificationsConfig(AppConfig):
    name = "fyp_backend.notifications"
    verbose_name = _("Notifications")

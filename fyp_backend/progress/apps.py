from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ProgressConfig(AppConfig):
    name = "fyp_backend.progress"
    verbose_name = _("Progress tracking")

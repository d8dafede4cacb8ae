"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core app."""

    name = "fyp_backend.core"
    verbose_name = "Core"

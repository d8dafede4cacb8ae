"""Celery configuration for the FYP backend."""

import os

from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.local")

app = Celery("fyp_backend")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django apps.
app.autodiscover_tasks()

# Daily reminders for upcoming progress log and report deadlines
app.conf.beat_schedule = {
    "send-deadline-reminders": {
        "task": "fyp_backend.notifications.tasks.send_deadline_reminders",
        "schedule": crontab(hour=7, minute=0),
    },
}

"""
Celery tasks for deadline reminders.
"""

import logging
from datetime import date
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.db.models import Max
from django.utils import timezone

from .dispatcher import notify
from .models import EventType

logger = logging.getLogger(__name__)

LOG_INTERVAL = timedelta(days=7)
REPORT_INTERVAL = timedelta(days=30)


def _reminder_days() -> set[int]:
    return set(getattr(settings, "FYP_DEADLINE_REMINDER_DAYS", (1, 3, 7)))


def upcoming_deadlines(today: date | None = None) -> list[dict]:
    """
    Next log and report due dates for every active project with a student.

    A log is due 7 days after the latest one, a report 30 days after the
    latest one. Projects that never submitted anything have no deadline yet.
    """
    from fyp_backend.projects.models import Project

    today = today or timezone.localdate()
    deadlines = []

    projects = (
        Project.objects.active()
        .filter(student__isnull=False)
        .select_related("student")
        .annotate(
            last_log=Max("progress_logs__created"),
            last_report=Max("progress_reports__created"),
        )
    )
    for project in projects:
        for kind, label, last, interval in (
            ("progress log", "Weekly Progress Log", project.last_log, LOG_INTERVAL),
            ("progress report", "Monthly Progress Report", project.last_report, REPORT_INTERVAL),
        ):
            if last is None:
                continue
            due = timezone.localdate(last) + interval
            deadlines.append(
                {
                    "project": project,
                    "user": project.student,
                    "kind": kind,
                    "label": label,
                    "due_date": due,
                    "days_left": (due - today).days,
                }
            )
    return deadlines


@shared_task(bind=True, max_retries=3)
def send_deadline_reminders(self) -> dict:
    """
    Remind students of log and report deadlines.

    Runs daily from Celery beat; a reminder goes out when the deadline is
    1, 3 or 7 days away.

    Returns:
        Dict with the number of deadlines found and reminders sent
    """
    try:
        deadlines = upcoming_deadlines()
    except Exception as exc:
        logger.exception("Deadline reminder run failed")
        raise self.retry(exc=exc, countdown=60) from exc

    windows = _reminder_days()
    sent = 0
    for deadline in deadlines:
        days_left = deadline["days_left"]
        if days_left not in windows:
            continue
        plural = "" if days_left == 1 else "s"
        message = (
            f'Reminder: Your {deadline["kind"]} "{deadline["label"]}" for '
            f'"{deadline["project"].title}" is due in {days_left} day{plural}.'
        )
        if notify(deadline["user"], EventType.UPCOMING_DEADLINE, message) is not None:
            sent += 1

    logger.info("Deadline reminders: %s deadlines, %s reminders sent", len(deadlines), sent)
    return {"deadlines": len(deadlines), "sent": sent}

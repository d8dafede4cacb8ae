"""
Tests for the deadline reminder task.
"""

from datetime import date
from datetime import datetime
from datetime import timedelta
from datetime import timezone as dt_timezone

import pytest
from django.utils import timezone

from fyp_backend.notifications.models import EventType
from fyp_backend.notifications.models import Notification
from fyp_backend.notifications.tasks import send_deadline_reminders
from fyp_backend.notifications.tasks import upcoming_deadlines
from fyp_backend.progress.models import ProgressLog
from fyp_backend.progress.models import ProgressReport
from fyp_backend.projects.models import ProjectStatus
from fyp_backend.projects.tests.factories import ProjectFactory


@pytest.fixture
def project(student, supervisor):
    return ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.APPROVED)


def backdate(instance, when):
    type(instance).objects.filter(id=instance.id).update(created=when)


def make_log(project, when):
    log = ProgressLog.objects.create(project=project, student=project.student, title="Log", content="Work")
    backdate(log, when)
    return log


def make_report(project, when):
    report = ProgressReport.objects.create(project=project, student=project.student, title="Report")
    backdate(report, when)
    return report


@pytest.mark.django_db
class TestUpcomingDeadlines:
    def test_next_log_and_report_due_dates(self, project):
        make_log(project, datetime(2026, 3, 2, 10, tzinfo=dt_timezone.utc))
        make_log(project, datetime(2026, 3, 9, 10, tzinfo=dt_timezone.utc))
        make_report(project, datetime(2026, 3, 1, 10, tzinfo=dt_timezone.utc))

        deadlines = {d["kind"]: d for d in upcoming_deadlines(today=date(2026, 3, 13))}

        assert deadlines["progress log"]["due_date"] == date(2026, 3, 16)
        assert deadlines["progress log"]["days_left"] == 3
        assert deadlines["progress report"]["due_date"] == date(2026, 3, 31)
        assert deadlines["progress report"]["days_left"] == 18

    def test_project_without_submissions_has_no_deadline(self, project):
        assert upcoming_deadlines(today=date(2026, 3, 13)) == []

    def test_inactive_projects_are_skipped(self, student, supervisor):
        archived = ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.ARCHIVED)
        make_log(archived, datetime(2026, 3, 9, 10, tzinfo=dt_timezone.utc))

        assert upcoming_deadlines(today=date(2026, 3, 13)) == []


@pytest.mark.django_db
class TestSendDeadlineReminders:
    @pytest.mark.parametrize(("days_ago", "reminded"), [(6, True), (4, True), (0, True), (5, False), (2, False)])
    def test_reminder_windows(self, student, project, days_ago, reminded):
        """Logs are due weekly; reminders go out 1, 3 and 7 days before."""
        make_log(project, timezone.now() - timedelta(days=days_ago))

        result = send_deadline_reminders()

        assert result["deadlines"] == 1
        assert result["sent"] == (1 if reminded else 0)
        assert Notification.objects.filter(user=student, event_type=EventType.UPCOMING_DEADLINE).exists() is reminded

    def test_message_wording(self, student, project):
        make_log(project, timezone.now() - timedelta(days=6))

        send_deadline_reminders()

        notification = Notification.objects.get(user=student)
        assert "is due in 1 day." in notification.message
        assert project.title in notification.message

    def test_configured_windows(self, student, project, settings):
        settings.FYP_DEADLINE_REMINDER_DAYS = [2]
        make_log(project, timezone.now() - timedelta(days=5))

        assert send_deadline_reminders()["sent"] == 1

"""
Progress tracking services.

Students log their work and submit reports on their own active project;
the project's supervisor reviews both.
"""

import logging

from django.db import transaction
from django.db.models import Q

from fyp_backend.core.db import lock_or_not_found
from fyp_backend.core.exceptions import InvalidTransitionError
from fyp_backend.core.exceptions import NotOwnerError
from fyp_backend.core.exceptions import ValidationError
from fyp_backend.core.fsm import run_transition
from fyp_backend.core.roles import Role
from fyp_backend.core.roles import is_manager
from fyp_backend.core.roles import require_role
from fyp_backend.feedback.services import record_feedback
from fyp_backend.notifications.dispatcher import notify
from fyp_backend.notifications.models import EventType
from fyp_backend.projects.models import Project
from fyp_backend.projects.models import ProjectStatus

from .models import LogStatus
from .models import ProgressLog
from .models import ProgressReport
from .models import ReportStatus
from .models import ReportType

logger = logging.getLogger(__name__)

REPORT_DECISIONS = {
    "approve": ReportStatus.APPROVED,
    "revise": ReportStatus.REVISION_REQUESTED,
}


def _required(value: str | None, label: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"The {label} is required.")
    return value.strip()


def _student_project(student, project_id) -> Project:
    require_role(student, Role.STUDENT)
    project = lock_or_not_found(Project.objects, "Project", id=project_id)
    if project.student_id != student.id:
        raise NotOwnerError("This is not your project.")
    if not project.accepts_examiners:
        raise InvalidTransitionError(
            "Progress can only be recorded on an approved project.",
            details={"status": str(project.status)},
        )
    return project


def _check_supervisor(supervisor, project: Project) -> None:
    require_role(supervisor, Role.SUPERVISOR)
    if project.supervisor_id != supervisor.id:
        raise NotOwnerError("You do not supervise this project.")


# Logs


@transaction.atomic
def submit_log(student, project_id, title: str, content: str) -> ProgressLog:
    project = _student_project(student, project_id)
    log = ProgressLog.objects.create(
        project=project,
        student=student,
        title=_required(title, "title"),
        content=_required(content, "content"),
    )
    logger.info("Progress log %s submitted on project %s", log.id, project.id)
    notify(
        project.supervisor,
        EventType.LOG_SUBMITTED,
        f'{student.get_full_name()} has submitted a new progress log: "{log.title}".',
    )
    return log


@transaction.atomic
def review_log(supervisor, log_id, comments: str, signed: bool = False) -> ProgressLog:
    """Comment on a log and optionally sign it off."""
    log = lock_or_not_found(ProgressLog.objects, "Progress log", id=log_id)
    _check_supervisor(supervisor, log.project)

    record_feedback(supervisor, comments, log=log)
    log.status = LogStatus.REVIEWED
    log.is_signed = log.is_signed or signed
    log.save(update_fields=["status", "is_signed", "modified"])

    logger.info("Progress log %s reviewed by %s (signed=%s)", log.id, supervisor.email, log.is_signed)
    notify(
        log.student,
        EventType.FEEDBACK_RECEIVED,
        f'New feedback from {supervisor.get_full_name()} on your progress log "{log.title}".',
    )
    return log


# Reports


@transaction.atomic
def submit_report(
    student,
    project_id,
    title: str,
    content: str = "",
    report_type: str = ReportType.PROGRESS,
    file_path: str = "",
    original_filename: str = "",
) -> ProgressReport:
    """Submit a report. Only the reference to the uploaded file is stored."""
    project = _student_project(student, project_id)
    if report_type not in ReportType.values:
        raise ValidationError(f"Invalid report type. Choices: {', '.join(ReportType.values)}")

    report = ProgressReport.objects.create(
        project=project,
        student=student,
        title=_required(title, "title"),
        content=(content or "").strip(),
        report_type=report_type,
        file_path=file_path or "",
        original_filename=original_filename or "",
    )
    logger.info("%s report %s submitted on project %s", report_type, report.id, project.id)
    notify(
        project.supervisor,
        EventType.REPORT_SUBMITTED,
        f'{student.get_full_name()} has submitted a new {report.get_report_type_display().lower()}: "{report.title}".',
    )
    return report


@transaction.atomic
def review_report(
    supervisor,
    report_id,
    comments: str,
    decision: str = "approve",
    grade: int | None = None,
) -> ProgressReport:
    """
    Approve a report or ask for a revision.

    Approving the final report makes the project ready for examination.
    """
    report = lock_or_not_found(ProgressReport.objects, "Progress report", id=report_id)
    project = lock_or_not_found(Project.objects, "Project", id=report.project_id)
    _check_supervisor(supervisor, project)

    if decision not in REPORT_DECISIONS:
        raise ValidationError(f"Invalid decision. Choices: {', '.join(REPORT_DECISIONS)}")
    if grade is not None and not 0 <= grade <= 100:
        raise ValidationError("Grade must be between 0 and 100.")
    if report.status != ReportStatus.SUBMITTED:
        raise InvalidTransitionError(
            f"A report in status '{report.status}' cannot be reviewed again.",
            details={"status": report.status},
        )

    record_feedback(supervisor, comments, report=report, grade=grade)
    report.status = REPORT_DECISIONS[decision]
    report.save(update_fields=["status", "modified"])

    if report.is_final and report.status == ReportStatus.APPROVED and project.status == ProjectStatus.APPROVED:
        run_transition(project, "mark_ready_for_examination")
        logger.info("Project %s is ready for examination", project.id)

    logger.info("Report %s reviewed by %s: %s", report.id, supervisor.email, report.status)
    notify(
        report.student,
        EventType.FEEDBACK_RECEIVED,
        f'New feedback from {supervisor.get_full_name()} on your report "{report.title}".',
    )
    return report


# Reads


def _visible_filter(user) -> Q:
    return (
        Q(student=user)
        | Q(project__supervisor=user)
        | Q(project__examiner_assignments__examiner=user)
    )


def logs_for_user(user, project_id=None):
    logs = ProgressLog.objects.select_related("project", "student")
    if not is_manager(user):
        logs = logs.filter(_visible_filter(user)).distinct()
    if project_id:
        logs = logs.filter(project_id=project_id)
    return logs


def reports_for_user(user, project_id=None):
    reports = ProgressReport.objects.select_related("project", "student")
    if not is_manager(user):
        reports = reports.filter(_visible_filter(user)).distinct()
    if project_id:
        reports = reports.filter(project_id=project_id)
    return reports

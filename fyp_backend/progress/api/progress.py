"""
Progress API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from fyp_backend.core.api import BaseAPI
from fyp_backend.core.api import IsAuthenticated
from fyp_backend.core.api import IsStudent
from fyp_backend.core.api import IsSupervisor
from fyp_backend.core.exceptions import ErrorSchema
from fyp_backend.core.schemas import UserMinimalSchema
from fyp_backend.progress import services
from fyp_backend.progress.models import ProgressLog
from fyp_backend.progress.models import ProgressReport
from fyp_backend.progress.schemas import LogReviewSchema
from fyp_backend.progress.schemas import ProgressLogCreateSchema
from fyp_backend.progress.schemas import ProgressLogSchema
from fyp_backend.progress.schemas import ProgressReportCreateSchema
from fyp_backend.progress.schemas import ProgressReportSchema
from fyp_backend.progress.schemas import ReportReviewSchema

WRITE_ERRORS = {400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema}


def log_to_schema(log: ProgressLog) -> ProgressLogSchema:
    return ProgressLogSchema(
        id=log.id,
        project_id=log.project_id,
        student=UserMinimalSchema.from_user(log.student),
        title=log.title,
        content=log.content,
        status=log.status,
        is_signed=log.is_signed,
        created=log.created,
    )


def report_to_schema(report: ProgressReport) -> ProgressReportSchema:
    return ProgressReportSchema(
        id=report.id,
        project_id=report.project_id,
        student=UserMinimalSchema.from_user(report.student),
        title=report.title,
        content=report.content,
        report_type=report.report_type,
        file_path=report.file_path,
        original_filename=report.original_filename,
        status=report.status,
        created=report.created,
    )


@api_controller("/progress", tags=["Progress"], permissions=[IsAuthenticated])
class ProgressController(BaseAPI):
    """Progress logs and reports of active projects."""

    @http_get(
        "/logs",
        response={200: list[ProgressLogSchema], 401: ErrorSchema},
        url_name="progress_logs_list",
    )
    def list_logs(self, request: HttpRequest, project_id: UUID | None = None):
        return 200, [log_to_schema(log) for log in services.logs_for_user(request.user, project_id)]

    @http_post(
        "/logs",
        response={201: ProgressLogSchema, **WRITE_ERRORS},
        permissions=[IsStudent],
        url_name="progress_logs_create",
    )
    def create_log(self, request: HttpRequest, data: ProgressLogCreateSchema):
        log = services.submit_log(request.user, data.project_id, data.title, data.content)
        return 201, log_to_schema(log)

    @http_post(
        "/logs/{log_id}/review",
        response={200: ProgressLogSchema, **WRITE_ERRORS},
        permissions=[IsSupervisor],
        url_name="progress_logs_review",
    )
    def review_log(self, request: HttpRequest, log_id: UUID, data: LogReviewSchema):
        log = services.review_log(request.user, log_id, data.comments, signed=data.signed)
        return 200, log_to_schema(log)

    @http_get(
        "/reports",
        response={200: list[ProgressReportSchema], 401: ErrorSchema},
        url_name="progress_reports_list",
    )
    def list_reports(self, request: HttpRequest, project_id: UUID | None = None):
        return 200, [report_to_schema(r) for r in services.reports_for_user(request.user, project_id)]

    @http_post(
        "/reports",
        response={201: ProgressReportSchema, **WRITE_ERRORS},
        permissions=[IsStudent],
        url_name="progress_reports_create",
    )
    def create_report(self, request: HttpRequest, data: ProgressReportCreateSchema):
        """Submit a report; the file itself is uploaded elsewhere, only its path is kept."""
        report = services.submit_report(request.user, **data.model_dump())
        return 201, report_to_schema(report)

    @http_post(
        "/reports/{report_id}/review",
        response={200: ProgressReportSchema, **WRITE_ERRORS},
        permissions=[IsSupervisor],
        url_name="progress_reports_review",
    )
    def review_report(self, request: HttpRequest, report_id: UUID, data: ReportReviewSchema):
        report = services.review_report(
            request.user,
            report_id,
            data.comments,
            decision=data.decision,
            grade=data.grade,
        )
        return 200, report_to_schema(report)

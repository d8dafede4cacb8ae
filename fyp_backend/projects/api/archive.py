"""
Archive API controller.

Read-only views over archived projects.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get

from fyp_backend.core.api import BaseAPI
from fyp_backend.core.api import IsAuthenticated
from fyp_backend.core.api import IsModerator
from fyp_backend.core.db import get_or_not_found
from fyp_backend.core.exceptions import ErrorSchema
from fyp_backend.core.schemas import UserMinimalSchema
from fyp_backend.projects import selectors
from fyp_backend.projects.api.projects import evaluation_to_schema
from fyp_backend.projects.schemas import ArchivedProjectDetailSchema
from fyp_backend.projects.schemas import ArchivedProjectSchema


def archived_to_schema(project) -> ArchivedProjectSchema:
    return ArchivedProjectSchema(
        id=project.id,
        title=project.title,
        specialization=project.specialization,
        project_type=project.project_type,
        student=UserMinimalSchema.from_optional(project.student),
        supervisor=UserMinimalSchema.from_optional(project.supervisor),
        archived_at=project.modified,
        evaluation_count=project.evaluation_count,
        average_grade=project.average_grade,
    )


@api_controller("/archive", tags=["Archive"], permissions=[IsAuthenticated])
class ArchiveController(BaseAPI):
    @http_get(
        "/",
        response={200: list[ArchivedProjectSchema], 401: ErrorSchema},
        url_name="archive_list",
    )
    def list_archive(
        self,
        request: HttpRequest,
        supervisor_id: UUID | None = None,
        year: int | None = None,
        search: str | None = None,
    ):
        """Archived projects, filterable by supervisor, year and title."""
        projects = selectors.archived_projects(supervisor_id=supervisor_id, year=year, search=search)
        return 200, [archived_to_schema(p) for p in projects]

    @http_get(
        "/previous",
        response={200: list[ArchivedProjectSchema], 401: ErrorSchema, 403: ErrorSchema},
        permissions=[IsModerator],
        url_name="archive_previous",
    )
    def previous(self, request: HttpRequest):
        """Graded projects the current moderator approved."""
        projects = selectors.previous_projects_for_moderator(request.user)
        return 200, [archived_to_schema(p) for p in projects]

    @http_get(
        "/{uuid:project_id}",
        response={200: ArchivedProjectDetailSchema, 401: ErrorSchema, 404: ErrorSchema},
        url_name="archive_detail",
    )
    def get_archived(self, request: HttpRequest, project_id: UUID):
        project = get_or_not_found(selectors.archived_projects(), "Archived project", id=project_id)
        evaluations = project.evaluations.select_related("examiner")
        return 200, ArchivedProjectDetailSchema(
            **archived_to_schema(project).model_dump(),
            description=project.description,
            expected_outcome=project.expected_outcome,
            evaluations=[evaluation_to_schema(e) for e in evaluations],
        )

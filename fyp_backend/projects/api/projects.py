"""
Projects API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from fyp_backend.core.api import BaseAPI
from fyp_backend.core.api import IsAuthenticated
from fyp_backend.core.api import IsExaminer
from fyp_backend.core.api import IsManager
from fyp_backend.core.api import IsStudent
from fyp_backend.core.api import IsSupervisor
from fyp_backend.core.db import get_or_not_found
from fyp_backend.core.exceptions import ErrorSchema
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.roles import Role
from fyp_backend.core.roles import is_manager
from fyp_backend.core.roles import user_has_role
from fyp_backend.core.schemas import UserMinimalSchema
from fyp_backend.projects import selectors
from fyp_backend.projects import services
from fyp_backend.projects.models import Evaluation
from fyp_backend.projects.models import ExaminerAssignment
from fyp_backend.projects.models import Project
from fyp_backend.projects.models import ProjectStatus
from fyp_backend.projects.schemas import AssignExaminerResponseSchema
from fyp_backend.projects.schemas import AssignExaminerSchema
from fyp_backend.projects.schemas import ConfirmAssignmentSchema
from fyp_backend.projects.schemas import EvaluationCreateSchema
from fyp_backend.projects.schemas import EvaluationSchema
from fyp_backend.projects.schemas import ExaminerAssignmentSchema
from fyp_backend.projects.schemas import ProjectDetailSchema
from fyp_backend.projects.schemas import ProjectListSchema


def assignment_to_schema(assignment: ExaminerAssignment) -> ExaminerAssignmentSchema:
    return ExaminerAssignmentSchema(
        id=assignment.id,
        examiner=UserMinimalSchema.from_user(assignment.examiner),
        status=assignment.status,
        created=assignment.created,
    )


def evaluation_to_schema(evaluation: Evaluation) -> EvaluationSchema:
    return EvaluationSchema(
        id=evaluation.id,
        examiner=UserMinimalSchema.from_user(evaluation.examiner),
        grade=evaluation.grade,
        comments=evaluation.comments,
        created=evaluation.created,
    )


def project_to_list_schema(project: Project) -> ProjectListSchema:
    """Convert Project to list schema."""
    return ProjectListSchema(
        id=project.id,
        title=project.title,
        description=project.description,
        specialization=project.specialization,
        project_type=project.project_type,
        status=project.status,
        student=UserMinimalSchema.from_optional(project.student),
        supervisor=UserMinimalSchema.from_optional(project.supervisor),
        created=project.created,
        modified=project.modified,
    )


def project_to_detail_schema(project: Project) -> ProjectDetailSchema:
    """Convert Project to detail schema."""
    proposal = getattr(project, "proposal", None)
    assignments = project.examiner_assignments.select_related("examiner")
    evaluations = project.evaluations.select_related("examiner")
    return ProjectDetailSchema(
        **project_to_list_schema(project).model_dump(),
        expected_outcome=project.expected_outcome,
        capacity=project.capacity,
        examiner=UserMinimalSchema.from_optional(project.examiner),
        moderator=UserMinimalSchema.from_optional(project.moderator),
        proposal_id=proposal.id if proposal else None,
        assignments=[assignment_to_schema(a) for a in assignments],
        evaluations=[evaluation_to_schema(e) for e in evaluations],
    )


@api_controller("/projects", tags=["Projects"], permissions=[IsAuthenticated])
class ProjectController(BaseAPI):
    """Materialized projects: browse, claim, examine, archive."""

    @http_get(
        "/",
        response={200: list[ProjectListSchema], 401: ErrorSchema},
        url_name="projects_list",
    )
    def list_projects(self, request: HttpRequest, status: str | None = None):
        """Projects the current user takes part in (all of them for managers)."""
        projects = selectors.projects_for_user(request.user)
        if status:
            projects = projects.filter(status=status)
        return 200, [project_to_list_schema(p) for p in projects]

    @http_get(
        "/available",
        response={200: list[ProjectListSchema], 401: ErrorSchema},
        url_name="projects_available",
    )
    def available(self, request: HttpRequest, specialization: str | None = None):
        """Supervisor projects still waiting for a student."""
        return 200, [project_to_list_schema(p) for p in selectors.available_projects(specialization)]

    @http_get(
        "/active",
        response={200: list[ProjectListSchema], 401: ErrorSchema, 403: ErrorSchema},
        permissions=[IsManager],
        url_name="projects_active",
    )
    def active(self, request: HttpRequest):
        return 200, [project_to_list_schema(p) for p in selectors.active_projects()]

    @http_get(
        "/{uuid:project_id}",
        response={200: ProjectDetailSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="projects_detail",
    )
    def get_project(self, request: HttpRequest, project_id: UUID):
        project = get_or_not_found(
            Project.objects.select_related("student", "supervisor", "examiner", "moderator"),
            "Project",
            id=project_id,
        )
        user = request.user
        visible = (
            project.status == ProjectStatus.AVAILABLE
            or project.is_member(user)
            or is_manager(user)
            or user_has_role(user, Role.MODERATOR)
        )
        if not visible:
            raise PermissionDeniedError("You do not take part in this project.")
        return 200, project_to_detail_schema(project)

    @http_post(
        "/{project_id}/claim",
        response={200: ProjectListSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        permissions=[IsStudent],
        url_name="projects_claim",
    )
    def claim(self, request: HttpRequest, project_id: UUID):
        """Select an available project."""
        return 200, project_to_list_schema(services.claim_project(request.user, project_id))

    @http_post(
        "/{project_id}/confirm",
        response={200: ProjectListSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        permissions=[IsSupervisor],
        url_name="projects_confirm",
    )
    def confirm(self, request: HttpRequest, project_id: UUID, data: ConfirmAssignmentSchema):
        """Accept or decline the student who claimed the project."""
        project = services.confirm_assignment(request.user, project_id, accept=data.accept)
        return 200, project_to_list_schema(project)

    @http_post(
        "/{project_id}/assign-examiner",
        response={
            200: AssignExaminerResponseSchema,
            201: AssignExaminerResponseSchema,
            401: ErrorSchema,
            403: ErrorSchema,
            404: ErrorSchema,
            409: ErrorSchema,
        },
        permissions=[IsManager],
        url_name="projects_assign_examiner",
    )
    def assign_examiner(self, request: HttpRequest, project_id: UUID, data: AssignExaminerSchema):
        """Assign an examiner; repeating the call is a no-op answered with 200."""
        assignment, created = services.assign_examiner(request.user, project_id, data.examiner_id)
        body = AssignExaminerResponseSchema(
            assignment=assignment_to_schema(assignment),
            created=created,
        )
        return (201 if created else 200), body

    @http_post(
        "/{project_id}/evaluate",
        response={201: EvaluationSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        permissions=[IsExaminer],
        url_name="projects_evaluate",
    )
    def evaluate(self, request: HttpRequest, project_id: UUID, data: EvaluationCreateSchema):
        evaluation = services.submit_evaluation(request.user, project_id, data.grade, data.comments)
        return 201, evaluation_to_schema(evaluation)

    @http_post(
        "/{project_id}/archive",
        response={200: ProjectListSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        permissions=[IsManager],
        url_name="projects_archive",
    )
    def archive(self, request: HttpRequest, project_id: UUID):
        return 200, project_to_list_schema(services.archive(request.user, project_id))

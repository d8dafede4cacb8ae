"""
Project services.

Everything that creates or moves a Project: materialization from an
approved proposal, the claim flow for supervisor projects, examiner
assignment, evaluation and archiving. Every mutating function runs in one
transaction and locks the rows it checks.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.db import transaction
from django.db.models import Count

from fyp_backend.core.db import get_or_not_found
from fyp_backend.core.db import lock_or_not_found
from fyp_backend.core.exceptions import AlreadyExistsError
from fyp_backend.core.exceptions import ConflictError
from fyp_backend.core.exceptions import InvalidTransitionError
from fyp_backend.core.exceptions import NotOwnerError
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.exceptions import ValidationError
from fyp_backend.core.fsm import run_transition
from fyp_backend.core.roles import Role
from fyp_backend.core.roles import require_manager
from fyp_backend.core.roles import require_role
from fyp_backend.core.roles import user_has_role
from fyp_backend.notifications.dispatcher import notify
from fyp_backend.notifications.dispatcher import notify_many
from fyp_backend.notifications.models import EventType

from .models import AssignmentStatus
from .models import Evaluation
from .models import ExaminerAssignment
from .models import Project
from .models import ProjectStatus

logger = logging.getLogger(__name__)

ACTIVE_PROJECT_CONFLICT = "The student already has an active project."


def _student_has_active_project(student, exclude_id=None) -> bool:
    projects = Project.objects.active().filter(student=student)
    if exclude_id is not None:
        projects = projects.exclude(id=exclude_id)
    return projects.exists()


def materialize(proposal, moderator) -> Project:
    """
    Create the Project for a proposal the moderator just approved.

    Must run inside the moderator's transaction: the caller saves the
    proposal afterwards, so a failure here leaves no trace of the approval.
    Student proposals give an approved project owned by the student;
    supervisor proposals give an available project waiting to be claimed.
    """
    if proposal.project_id is not None:
        raise AlreadyExistsError("This proposal already has a project.")

    if proposal.is_supervisor_proposal:
        student = None
        supervisor = proposal.submitted_by
        status = ProjectStatus.AVAILABLE
    else:
        student = proposal.submitted_by
        supervisor = proposal.submitted_to
        status = ProjectStatus.APPROVED
        if _student_has_active_project(student):
            raise ConflictError(ACTIVE_PROJECT_CONFLICT)

    try:
        with transaction.atomic():
            project = Project.objects.create(
                title=proposal.title,
                description=proposal.description,
                specialization=proposal.specialization,
                project_type=proposal.proposal_type,
                expected_outcome=proposal.expected_outcome,
                student=student,
                supervisor=supervisor,
                moderator=moderator,
                status=status,
            )
    except IntegrityError as exc:
        logger.warning("Materializing proposal %s hit a constraint: %s", proposal.id, exc)
        raise ConflictError(ACTIVE_PROJECT_CONFLICT) from exc

    proposal.project = project
    logger.info("Project %s materialized from proposal %s (%s)", project.id, proposal.id, status)
    return project


@transaction.atomic
def claim_project(student, project_id) -> Project:
    """A student picks an available supervisor project; the supervisor confirms later."""
    require_role(student, Role.STUDENT)
    User = get_user_model()
    User.objects.select_for_update().filter(id=student.id).first()

    project = lock_or_not_found(Project.objects, "Project", id=project_id)
    if project.status != ProjectStatus.AVAILABLE:
        raise InvalidTransitionError("This project is not available.")
    if _student_has_active_project(student):
        raise ConflictError(ACTIVE_PROJECT_CONFLICT)

    try:
        with transaction.atomic():
            run_transition(project, "claim", student)
    except IntegrityError as exc:
        raise ConflictError(ACTIVE_PROJECT_CONFLICT) from exc

    logger.info("Project %s claimed by %s", project.id, student.email)
    notify(
        project.supervisor,
        EventType.PROJECT_CLAIMED,
        f'{student.get_full_name()} selected your project "{project.title}".',
    )
    return project


@transaction.atomic
def confirm_assignment(supervisor, project_id, accept: bool = True) -> Project:
    """The supervisor accepts the claiming student, or releases the project."""
    require_role(supervisor, Role.SUPERVISOR)
    project = lock_or_not_found(Project.objects, "Project", id=project_id)
    if project.supervisor_id != supervisor.id:
        raise NotOwnerError("You do not supervise this project.")

    student = project.student
    run_transition(project, "confirm_assignment" if accept else "release")

    if accept:
        event, verdict = EventType.PROPOSAL_APPROVED, "accepted"
    else:
        event, verdict = EventType.PROPOSAL_REJECTED, "declined"
    logger.info("Supervisor %s %s the claim on project %s", supervisor.email, verdict, project.id)
    notify(student, event, f'Your selection of "{project.title}" was {verdict} by the supervisor.')
    return project


@transaction.atomic
def mark_ready_for_examination(project_id) -> Project:
    project = lock_or_not_found(Project.objects, "Project", id=project_id)
    run_transition(project, "mark_ready_for_examination")
    logger.info("Project %s is ready for examination", project.id)
    return project


@transaction.atomic
def assign_examiner(manager, project_id, examiner_id) -> tuple[ExaminerAssignment, bool]:
    """
    Assign an examiner to an approved project.

    Idempotent: assigning the same examiner twice returns the existing row
    with created=False and sends nothing.
    """
    require_manager(manager)
    User = get_user_model()

    project = lock_or_not_found(Project.objects, "Project", id=project_id)
    examiner = get_or_not_found(User.objects, "Examiner", id=examiner_id)

    if not project.accepts_examiners:
        raise InvalidTransitionError(
            "Examiners can only be assigned to approved projects.",
            details={"status": str(project.status)},
        )
    if not user_has_role(examiner, Role.EXAMINER):
        raise PermissionDeniedError("The selected user does not hold the Examiner role.")

    try:
        with transaction.atomic():
            assignment, created = ExaminerAssignment.objects.get_or_create(
                project=project,
                examiner=examiner,
                defaults={"assigned_by": manager},
            )
    except IntegrityError:
        # Lost a race against another assignment of the same pair.
        assignment = ExaminerAssignment.objects.get(project=project, examiner=examiner)
        created = False

    if not created:
        logger.info("Examiner %s already assigned to project %s", examiner.email, project.id)
        return assignment, False

    if project.examiner_id is None:
        project.examiner = examiner
        project.save(update_fields=["examiner", "modified"])

    logger.info("Examiner %s assigned to project %s by %s", examiner.email, project.id, manager.email)
    notify_many(
        [project.student, examiner],
        EventType.EXAMINER_ASSIGNED,
        f'{examiner.get_full_name()} has been assigned as examiner for "{project.title}".',
    )
    return assignment, True


@transaction.atomic
def submit_evaluation(examiner, project_id, grade: int, comments: str = "") -> Evaluation:
    require_role(examiner, Role.EXAMINER)
    project = lock_or_not_found(Project.objects, "Project", id=project_id)
    assignment = (
        ExaminerAssignment.objects.select_for_update()
        .filter(project=project, examiner=examiner)
        .first()
    )
    if assignment is None:
        raise NotOwnerError("You are not assigned to examine this project.")
    if not project.accepts_examiners:
        raise InvalidTransitionError("This project cannot be evaluated in its current status.")
    if not 0 <= grade <= 100:
        raise ValidationError("Grade must be between 0 and 100.")
    if assignment.status == AssignmentStatus.COMPLETED:
        raise AlreadyExistsError("You have already evaluated this project.")

    evaluation = Evaluation.objects.create(
        project=project,
        examiner=examiner,
        grade=grade,
        comments=comments.strip(),
    )
    assignment.status = AssignmentStatus.COMPLETED
    assignment.save(update_fields=["status", "modified"])

    logger.info("Project %s graded %s by %s", project.id, grade, examiner.email)
    notify_many(
        [project.student, project.supervisor],
        EventType.GRADE_SUBMITTED,
        f'"{project.title}" has been evaluated by {examiner.get_full_name()} (Score: {grade}).',
    )
    return evaluation


@transaction.atomic
def archive(manager, project_id) -> Project:
    """Archive a project once every assigned examiner has graded it."""
    require_manager(manager)
    project = lock_or_not_found(Project.objects, "Project", id=project_id)
    run_transition(project, "archive")
    logger.info("Project %s archived by %s", project.id, manager.email)
    return project


@transaction.atomic
def remove_duplicate_assignments() -> int:
    """
    Delete duplicate (project, examiner) rows, keeping the oldest.

    Only useful on data loaded before the unique constraint existed; with
    the constraint in place there is nothing to remove.
    """
    duplicates = (
        ExaminerAssignment.objects.values("project_id", "examiner_id")
        .annotate(rows=Count("id"))
        .filter(rows__gt=1)
    )
    removed = 0
    for pair in duplicates:
        rows = ExaminerAssignment.objects.filter(
            project_id=pair["project_id"],
            examiner_id=pair["examiner_id"],
        ).order_by("created", "id")
        keep = rows.first()
        deleted, _ = rows.exclude(id=keep.id).delete()
        removed += deleted
        logger.warning(
            "Removed %s duplicate assignments of examiner %s on project %s",
            deleted,
            pair["examiner_id"],
            pair["project_id"],
        )
    return removed

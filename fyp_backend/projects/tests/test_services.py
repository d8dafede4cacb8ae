"""
Tests for project services: examiner assignment, evaluation, archive and claims.
"""

import pytest
from django.db import IntegrityError
from django.db import transaction

from fyp_backend.core.exceptions import AlreadyExistsError
from fyp_backend.core.exceptions import ConflictError
from fyp_backend.core.exceptions import InvalidTransitionError
from fyp_backend.core.exceptions import NotFoundError
from fyp_backend.core.exceptions import NotOwnerError
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.exceptions import ValidationError
from fyp_backend.core.roles import Role
from fyp_backend.notifications.models import EventType
from fyp_backend.notifications.models import Notification
from fyp_backend.projects import selectors
from fyp_backend.projects import services
from fyp_backend.projects.models import AssignmentStatus
from fyp_backend.projects.models import Evaluation
from fyp_backend.projects.models import ExaminerAssignment
from fyp_backend.projects.models import Project
from fyp_backend.projects.models import ProjectStatus
from fyp_backend.projects.tests.factories import ExaminerAssignmentFactory
from fyp_backend.projects.tests.factories import ProjectFactory
from fyp_backend.users.tests.factories import UserFactory


@pytest.fixture
def project(student, supervisor):
    return ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.APPROVED)


@pytest.mark.django_db
class TestAssignExaminer:
    def test_not_allowed_before_approval(self, manager, examiner, student, supervisor):
        """Assignments wait for the project to be approved."""
        project = ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.ASSIGNED)

        with pytest.raises(InvalidTransitionError):
            services.assign_examiner(manager, project.id, examiner.id)

        assert not ExaminerAssignment.objects.exists()

        services.confirm_assignment(supervisor, project.id)
        assignment, created = services.assign_examiner(manager, project.id, examiner.id)

        assert created is True
        assert assignment.examiner == examiner

    def test_assignment_notifies_student_and_examiner(self, manager, examiner, student, project):
        services.assign_examiner(manager, project.id, examiner.id)

        for user in (student, examiner):
            assert Notification.objects.filter(user=user, event_type=EventType.EXAMINER_ASSIGNED).exists()
        assert Project.objects.get(id=project.id).examiner == examiner

    def test_idempotent(self, manager, examiner, project):
        first, created = services.assign_examiner(manager, project.id, examiner.id)
        again, created_again = services.assign_examiner(manager, project.id, examiner.id)

        assert created is True
        assert created_again is False
        assert first.id == again.id
        assert ExaminerAssignment.objects.filter(project=project, examiner=examiner).count() == 1
        assert Notification.objects.filter(user=examiner).count() == 1

    def test_second_examiner_keeps_first_on_project(self, manager, examiner, project, role_groups):
        second = UserFactory(roles=[Role.EXAMINER])

        services.assign_examiner(manager, project.id, examiner.id)
        services.assign_examiner(manager, project.id, second.id)

        assert ExaminerAssignment.objects.filter(project=project).count() == 2
        assert Project.objects.get(id=project.id).examiner == examiner

    def test_requires_examiner_role(self, manager, supervisor, project):
        with pytest.raises(PermissionDeniedError):
            services.assign_examiner(manager, project.id, supervisor.id)

    def test_requires_manager(self, moderator, examiner, project):
        with pytest.raises(PermissionDeniedError):
            services.assign_examiner(moderator, project.id, examiner.id)

    def test_unknown_project_and_examiner(self, manager, examiner, project):
        with pytest.raises(NotFoundError):
            services.assign_examiner(manager, "00000000-0000-0000-0000-000000000000", examiner.id)
        with pytest.raises(NotFoundError):
            services.assign_examiner(manager, project.id, "00000000-0000-0000-0000-000000000000")

    def test_lost_race_returns_existing_row(self, manager, examiner, project, monkeypatch):
        """A concurrent insert of the same pair surfaces as the existing assignment."""
        existing = ExaminerAssignmentFactory(project=project, examiner=examiner)

        def racing_get_or_create(**kwargs):
            msg = "UNIQUE constraint failed: unique_examiner_per_project"
            raise IntegrityError(msg)

        monkeypatch.setattr(ExaminerAssignment.objects, "get_or_create", racing_get_or_create)

        assignment, created = services.assign_examiner(manager, project.id, examiner.id)

        assert created is False
        assert assignment.id == existing.id
        assert not Notification.objects.filter(user=examiner).exists()

    def test_nothing_to_reconcile(self, manager, examiner, project):
        services.assign_examiner(manager, project.id, examiner.id)

        assert services.remove_duplicate_assignments() == 0
        assert ExaminerAssignment.objects.count() == 1


@pytest.mark.django_db
class TestEvaluation:
    def test_submit_evaluation(self, examiner, student, supervisor, project):
        ExaminerAssignmentFactory(project=project, examiner=examiner)

        evaluation = services.submit_evaluation(examiner, project.id, 85, "  Solid work  ")

        assert evaluation.grade == 85
        assert evaluation.comments == "Solid work"
        assert ExaminerAssignment.objects.get(project=project).status == AssignmentStatus.COMPLETED
        for user in (student, supervisor):
            notification = Notification.objects.get(user=user, event_type=EventType.GRADE_SUBMITTED)
            assert "Score: 85" in notification.message

    def test_only_assigned_examiner(self, examiner, project):
        with pytest.raises(NotOwnerError):
            services.submit_evaluation(examiner, project.id, 70)

    def test_grade_range(self, examiner, project):
        ExaminerAssignmentFactory(project=project, examiner=examiner)

        with pytest.raises(ValidationError):
            services.submit_evaluation(examiner, project.id, 101)

    def test_evaluate_once(self, examiner, project):
        ExaminerAssignmentFactory(project=project, examiner=examiner)
        services.submit_evaluation(examiner, project.id, 60)

        with pytest.raises(AlreadyExistsError):
            services.submit_evaluation(examiner, project.id, 90)

        assert Evaluation.objects.count() == 1


@pytest.mark.django_db
class TestArchive:
    def test_archive_after_all_evaluations(self, manager, examiner, project):
        ExaminerAssignmentFactory(project=project, examiner=examiner)
        services.submit_evaluation(examiner, project.id, 72)

        archived = services.archive(manager, project.id)

        assert archived.status == ProjectStatus.ARCHIVED
        assert Project.objects.get(id=project.id).status == ProjectStatus.ARCHIVED

    def test_archive_requires_completed_evaluation(self, manager, examiner, project, role_groups):
        ExaminerAssignmentFactory(project=project, examiner=examiner)
        ExaminerAssignmentFactory(project=project, examiner=UserFactory(roles=[Role.EXAMINER]))
        services.submit_evaluation(examiner, project.id, 72)

        with pytest.raises(InvalidTransitionError):
            services.archive(manager, project.id)

    def test_archive_requires_an_examiner(self, manager, project):
        with pytest.raises(InvalidTransitionError):
            services.archive(manager, project.id)

    def test_archived_projects_summary(self, manager, examiner, project, role_groups):
        second = UserFactory(roles=[Role.EXAMINER])
        ExaminerAssignmentFactory(project=project, examiner=examiner)
        ExaminerAssignmentFactory(project=project, examiner=second)
        services.submit_evaluation(examiner, project.id, 70)
        services.submit_evaluation(second, project.id, 80)
        services.archive(manager, project.id)

        archived = selectors.archived_projects().get(id=project.id)

        assert archived.evaluation_count == 2
        assert archived.average_grade == 75


@pytest.mark.django_db
class TestClaimFlow:
    @pytest.fixture
    def offered(self, supervisor):
        return ProjectFactory(student=None, supervisor=supervisor, status=ProjectStatus.AVAILABLE)

    def test_claim_and_confirm(self, student, supervisor, offered):
        claimed = services.claim_project(student, offered.id)

        assert claimed.status == ProjectStatus.ASSIGNED
        assert claimed.student == student
        assert Notification.objects.filter(user=supervisor, event_type=EventType.PROJECT_CLAIMED).exists()

        confirmed = services.confirm_assignment(supervisor, offered.id, accept=True)

        assert confirmed.status == ProjectStatus.APPROVED
        assert Notification.objects.filter(user=student, event_type=EventType.PROPOSAL_APPROVED).exists()

    def test_decline_releases_project(self, student, supervisor, offered):
        services.claim_project(student, offered.id)

        released = services.confirm_assignment(supervisor, offered.id, accept=False)

        assert released.status == ProjectStatus.AVAILABLE
        assert released.student is None
        assert Notification.objects.filter(user=student, event_type=EventType.PROPOSAL_REJECTED).exists()

    def test_claimed_project_is_not_available(self, student, other_student, offered):
        services.claim_project(student, offered.id)

        with pytest.raises(InvalidTransitionError):
            services.claim_project(other_student, offered.id)

    def test_one_active_project_per_student(self, student, supervisor, offered, project):
        with pytest.raises(ConflictError):
            services.claim_project(student, offered.id)

        assert Project.objects.get(id=offered.id).status == ProjectStatus.AVAILABLE

    def test_constraint_catches_missed_active_project(self, student, offered, project, monkeypatch):
        """When the pre-check misses, the database constraint still refuses the claim."""
        monkeypatch.setattr(services, "_student_has_active_project", lambda student, exclude_id=None: False)

        with pytest.raises(ConflictError):
            services.claim_project(student, offered.id)

        stored = Project.objects.get(id=offered.id)
        assert stored.status == ProjectStatus.AVAILABLE
        assert stored.student is None

    def test_only_project_supervisor_confirms(self, student, other_supervisor, offered):
        services.claim_project(student, offered.id)

        with pytest.raises(NotOwnerError):
            services.confirm_assignment(other_supervisor, offered.id)


@pytest.mark.django_db
class TestStorageConstraints:
    def test_duplicate_examiner_assignment(self, examiner, project):
        ExaminerAssignmentFactory(project=project, examiner=examiner)

        with pytest.raises(IntegrityError), transaction.atomic():
            ExaminerAssignment.objects.create(project=project, examiner=examiner)

        assert ExaminerAssignment.objects.filter(project=project, examiner=examiner).count() == 1

    def test_second_active_project_for_student(self, student, supervisor, project):
        with pytest.raises(IntegrityError), transaction.atomic():
            ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.READY_FOR_EXAMINATION)

        assert Project.objects.filter(student=student).count() == 1

    def test_archived_projects_do_not_count(self, student, supervisor, project):
        ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.ARCHIVED)
        ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.ARCHIVED)

        assert Project.objects.filter(student=student).count() == 3


@pytest.mark.django_db
class TestSelectors:
    def test_projects_for_user(self, student, other_student, supervisor, examiner, manager, project):
        ProjectFactory(student=other_student, supervisor=supervisor)
        ExaminerAssignmentFactory(project=project, examiner=examiner)

        assert list(selectors.projects_for_user(student)) == [project]
        assert list(selectors.projects_for_user(examiner)) == [project]
        assert selectors.projects_for_user(supervisor).count() == 2
        assert selectors.projects_for_user(manager).count() == 2

    def test_available_by_specialization(self, supervisor):
        ml = ProjectFactory(student=None, supervisor=supervisor, status=ProjectStatus.AVAILABLE, specialization="ML")
        ProjectFactory(student=None, supervisor=supervisor, status=ProjectStatus.AVAILABLE, specialization="Web")

        assert list(selectors.available_projects("ml")) == [ml]
        assert selectors.available_projects().count() == 2

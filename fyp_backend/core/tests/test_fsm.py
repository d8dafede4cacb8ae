import pytest

from fyp_backend.core.exceptions import InvalidTransitionError
from fyp_backend.core.fsm import run_transition
from fyp_backend.projects.models import Project
from fyp_backend.projects.models import ProjectStatus
from fyp_backend.projects.tests.factories import ProjectFactory


@pytest.mark.django_db
class TestRunTransition:
    def test_allowed_transition_is_saved(self, role_groups):
        project = ProjectFactory(status=ProjectStatus.APPROVED)

        run_transition(project, "mark_ready_for_examination")

        assert Project.objects.get(id=project.id).status == ProjectStatus.READY_FOR_EXAMINATION

    def test_save_false_leaves_row_untouched(self, role_groups):
        project = ProjectFactory(status=ProjectStatus.APPROVED)

        run_transition(project, "mark_ready_for_examination", save=False)

        assert project.status == ProjectStatus.READY_FOR_EXAMINATION
        assert Project.objects.get(id=project.id).status == ProjectStatus.APPROVED

    def test_wrong_source_state_raises_invalid_transition(self, role_groups):
        project = ProjectFactory(status=ProjectStatus.AVAILABLE, student=None)

        with pytest.raises(InvalidTransitionError) as exc_info:
            run_transition(project, "mark_ready_for_examination")

        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {
            "status": "available",
            "transition": "mark_ready_for_examination",
        }

    def test_failed_condition_raises_invalid_transition(self, role_groups):
        """Archiving needs a completed evaluation."""
        project = ProjectFactory(status=ProjectStatus.APPROVED)

        with pytest.raises(InvalidTransitionError):
            run_transition(project, "archive")

        assert Project.objects.get(id=project.id).status == ProjectStatus.APPROVED

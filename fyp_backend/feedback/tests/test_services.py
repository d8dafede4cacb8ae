import pytest
from django.db import IntegrityError
from django.db import transaction

from fyp_backend.core.exceptions import ValidationError
from fyp_backend.feedback.models import Feedback
from fyp_backend.feedback.models import FeedbackTarget
from fyp_backend.feedback.services import feedback_for
from fyp_backend.feedback.services import record_feedback
from fyp_backend.progress.models import ProgressLog
from fyp_backend.projects.tests.factories import ProjectFactory
from fyp_backend.proposals.tests.factories import ProposalFactory


@pytest.mark.django_db
class TestRecordFeedback:
    def test_feedback_on_proposal(self, supervisor):
        proposal = ProposalFactory(submitted_to=supervisor)

        feedback = record_feedback(supervisor, "  Narrow the scope  ", proposal=proposal)

        assert feedback.comments == "Narrow the scope"
        assert feedback.target_type == FeedbackTarget.PROPOSAL
        assert feedback.target == proposal
        assert list(feedback_for(proposal=proposal)) == [feedback]

    def test_exactly_one_target(self, supervisor, student):
        proposal = ProposalFactory(submitted_to=supervisor)
        project = ProjectFactory(student=student, supervisor=supervisor)
        log = ProgressLog.objects.create(project=project, student=student, title="Week 1", content="Work")

        with pytest.raises(ValidationError):
            record_feedback(supervisor, "Both", proposal=proposal, log=log)
        with pytest.raises(ValidationError):
            record_feedback(supervisor, "Neither")

    def test_comments_required(self, supervisor):
        proposal = ProposalFactory(submitted_to=supervisor)

        with pytest.raises(ValidationError):
            record_feedback(supervisor, "   ", proposal=proposal)

    def test_database_enforces_single_target(self, supervisor):
        with pytest.raises(IntegrityError), transaction.atomic():
            Feedback.objects.create(reviewer=supervisor, comments="Orphan")

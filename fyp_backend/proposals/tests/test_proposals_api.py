"""
API tests for proposal endpoints.
"""

import pytest
from django.test import Client

from fyp_backend.core.roles import Role
from fyp_backend.projects.models import Project
from fyp_backend.projects.models import ProjectStatus
from fyp_backend.projects.tests.factories import ProjectFactory
from fyp_backend.proposals.lifecycle import ProposalStatus
from fyp_backend.proposals.models import Proposal
from fyp_backend.proposals.tests.factories import ProposalFactory
from fyp_backend.users.tests.factories import UserFactory


@pytest.fixture
def proposal_data(supervisor):
    return {
        "title": "Campus event tracker",
        "description": "Cross-platform app listing campus events.",
        "proposal_type": "application",
        "specialization": "Mobile",
        "target_supervisor_id": str(supervisor.id),
    }


@pytest.mark.django_db
class TestCreateProposal:
    """Tests for POST /api/proposals/"""

    def test_unauthenticated(self, proposal_data):
        response = Client().post("/api/proposals/", data=proposal_data, content_type="application/json")
        assert response.status_code in (401, 403)

    def test_student_submits(self, client_for, student, supervisor, proposal_data):
        response = client_for(student).post("/api/proposals/", data=proposal_data, content_type="application/json")

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["submitted_by"]["id"] == str(student.id)
        assert data["submitted_to"]["id"] == str(supervisor.id)
        assert data["project_id"] is None

    def test_active_project_conflict(self, client_for, student, supervisor, proposal_data):
        ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.APPROVED)

        response = client_for(student).post("/api/proposals/", data=proposal_data, content_type="application/json")

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_invalid_type_rejected_by_schema(self, client_for, student, proposal_data):
        proposal_data["proposal_type"] = "thesis"

        response = client_for(student).post("/api/proposals/", data=proposal_data, content_type="application/json")

        assert response.status_code == 422

    def test_examiner_cannot_submit(self, client_for, examiner, proposal_data):
        response = client_for(examiner).post("/api/proposals/", data=proposal_data, content_type="application/json")

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"


@pytest.mark.django_db
class TestReviewProposal:
    """Tests for PUT /api/proposals/{id}/review"""

    def test_target_supervisor_reviews(self, client_for, student, supervisor):
        proposal = ProposalFactory(submitted_by=student, submitted_to=supervisor)

        response = client_for(supervisor).put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "approve", "comments": "Go ahead"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "supervisor_approved"
        assert response.json()["has_been_approved"] is True

    def test_moderator_final_approval(self, client_for, student, supervisor, moderator):
        proposal = ProposalFactory(
            submitted_by=student,
            submitted_to=supervisor,
            status=ProposalStatus.SUPERVISOR_APPROVED,
            has_been_approved=True,
        )

        response = client_for(moderator).put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "approve"},
            content_type="application/json",
        )

        assert response.status_code == 200
        project_id = response.json()["project_id"]
        assert Project.objects.get(id=project_id).student == student

    def test_target_who_moderates_reviews_both_tiers(self, client_for, student, role_groups):
        """A supervisor holding Moderator reviews first, then moderates the same proposal."""
        reviewer = UserFactory(email="dual@example.com", roles=[Role.SUPERVISOR, Role.MODERATOR])
        proposal = ProposalFactory(submitted_by=student, submitted_to=reviewer)
        client = client_for(reviewer)

        first = client.put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "approve"},
            content_type="application/json",
        )
        second = client.put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "approve"},
            content_type="application/json",
        )

        assert first.status_code == 200
        assert first.json()["status"] == "supervisor_approved"
        assert second.status_code == 200
        assert second.json()["status"] == "approved"
        assert Project.objects.get(id=second.json()["project_id"]).supervisor == reviewer

    def test_moderator_on_pending_student_proposal(self, client_for, student, supervisor, moderator):
        proposal = ProposalFactory(submitted_by=student, submitted_to=supervisor)

        response = client_for(moderator).put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "approve"},
            content_type="application/json",
        )

        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_TRANSITION"

    def test_other_supervisor_is_not_owner(self, client_for, student, supervisor, other_supervisor):
        proposal = ProposalFactory(submitted_by=student, submitted_to=supervisor)

        response = client_for(other_supervisor).put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "approve"},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_OWNER"

    def test_student_cannot_review(self, client_for, student, supervisor):
        proposal = ProposalFactory(submitted_by=student, submitted_to=supervisor)

        response = client_for(student).put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "approve"},
            content_type="application/json",
        )

        assert response.status_code == 403

    def test_unknown_decision(self, client_for, student, supervisor):
        proposal = ProposalFactory(submitted_by=student, submitted_to=supervisor)

        response = client_for(supervisor).put(
            f"/api/proposals/{proposal.id}/review",
            data={"decision": "maybe"},
            content_type="application/json",
        )

        assert response.status_code == 422
        assert Proposal.objects.get(id=proposal.id).status == ProposalStatus.PENDING

    def test_missing_proposal(self, client_for, supervisor):
        response = client_for(supervisor).put(
            "/api/proposals/00000000-0000-0000-0000-000000000000/review",
            data={"decision": "approve"},
            content_type="application/json",
        )

        assert response.status_code == 404


@pytest.mark.django_db
class TestReadProposals:
    def test_list_only_own(self, client_for, student, other_student, supervisor):
        ProposalFactory(submitted_by=student, submitted_to=supervisor)
        ProposalFactory(submitted_by=other_student, submitted_to=supervisor)

        response = client_for(student).get("/api/proposals/")

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_status_filter(self, client_for, student, supervisor, moderator):
        ProposalFactory(submitted_by=student, submitted_to=supervisor)
        ProposalFactory(submitted_to=supervisor, status=ProposalStatus.SUPERVISOR_APPROVED)

        response = client_for(moderator).get("/api/proposals/", {"status": "supervisor_approved"})

        assert response.status_code == 200
        assert [p["status"] for p in response.json()] == ["supervisor_approved"]

    def test_detail_forbidden_for_outsider(self, client_for, student, other_student, supervisor):
        proposal = ProposalFactory(submitted_by=student, submitted_to=supervisor)

        response = client_for(other_student).get(f"/api/proposals/{proposal.id}")

        assert response.status_code == 403

    def test_edit_and_feedback(self, client_for, student, supervisor):
        proposal = ProposalFactory(
            submitted_by=student,
            submitted_to=supervisor,
            status=ProposalStatus.MODIFICATIONS_REQUIRED,
        )
        client = client_for(student)

        response = client.put(
            f"/api/proposals/{proposal.id}",
            data={"title": "Campus event tracker v2"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["id"] == str(proposal.id)
        assert response.json()["status"] == "pending"
        assert response.json()["title"] == "Campus event tracker v2"

        feedback = client.get(f"/api/proposals/{proposal.id}/feedback")
        assert feedback.status_code == 200
        assert feedback.json() == []

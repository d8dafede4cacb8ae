"""
API tests for progress endpoints.
"""

import pytest

from fyp_backend.progress import services
from fyp_backend.projects.models import ProjectStatus
from fyp_backend.projects.tests.factories import ProjectFactory


@pytest.fixture
def project(student, supervisor):
    return ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.APPROVED)


@pytest.mark.django_db
class TestLogsAPI:
    def test_create_and_list(self, client_for, student, project):
        client = client_for(student)

        response = client.post(
            "/api/progress/logs",
            data={"project_id": str(project.id), "title": "Week 2", "content": "Trained the baseline."},
            content_type="application/json",
        )
        assert response.status_code == 201
        assert response.json()["status"] == "submitted"

        listing = client.get("/api/progress/logs", {"project_id": str(project.id)})
        assert listing.status_code == 200
        assert [log["title"] for log in listing.json()] == ["Week 2"]

    def test_supervisor_cannot_create(self, client_for, supervisor, project):
        response = client_for(supervisor).post(
            "/api/progress/logs",
            data={"project_id": str(project.id), "title": "Week 2", "content": "Not mine."},
            content_type="application/json",
        )

        assert response.status_code == 403

    def test_review(self, client_for, student, supervisor, project):
        log = services.submit_log(student, project.id, "Week 2", "Trained the baseline.")

        response = client_for(supervisor).post(
            f"/api/progress/logs/{log.id}/review",
            data={"comments": "Compare with a second baseline", "signed": True},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "reviewed"
        assert response.json()["is_signed"] is True

    def test_review_by_other_supervisor(self, client_for, student, other_supervisor, project):
        log = services.submit_log(student, project.id, "Week 2", "Trained the baseline.")

        response = client_for(other_supervisor).post(
            f"/api/progress/logs/{log.id}/review",
            data={"comments": "Not my student"},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_OWNER"


@pytest.mark.django_db
class TestReportsAPI:
    def test_final_report_flow(self, client_for, student, supervisor, project):
        response = client_for(student).post(
            "/api/progress/reports",
            data={
                "project_id": str(project.id),
                "title": "Final report",
                "report_type": "final",
                "file_path": "reports/final.pdf",
                "original_filename": "final.pdf",
            },
            content_type="application/json",
        )
        assert response.status_code == 201
        report_id = response.json()["id"]

        response = client_for(supervisor).post(
            f"/api/progress/reports/{report_id}/review",
            data={"comments": "Ready", "decision": "approve", "grade": 80},
            content_type="application/json",
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        project_response = client_for(student).get(f"/api/projects/{project.id}")
        assert project_response.json()["status"] == "ready_for_examination"

    def test_progress_on_unapproved_project(self, client_for, student, supervisor):
        project = ProjectFactory(student=student, supervisor=supervisor, status=ProjectStatus.ASSIGNED)

        response = client_for(student).post(
            "/api/progress/reports",
            data={"project_id": str(project.id), "title": "Too early"},
            content_type="application/json",
        )

        assert response.status_code == 409

"""
Project schemas for API requests and responses.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import field_validator

from fyp_backend.core.schemas import UserMinimalSchema


class ProjectListSchema(Schema):
    """Schema for project list view."""

    id: UUID
    title: str
    description: str
    specialization: str
    project_type: str
    status: str
    student: UserMinimalSchema | None
    supervisor: UserMinimalSchema | None
    created: datetime
    modified: datetime


class ExaminerAssignmentSchema(Schema):
    id: UUID
    examiner: UserMinimalSchema
    status: str
    created: datetime


class EvaluationSchema(Schema):
    id: UUID
    examiner: UserMinimalSchema
    grade: int
    comments: str
    created: datetime


class ProjectDetailSchema(ProjectListSchema):
    """Detailed project schema with examination data."""

    expected_outcome: str
    capacity: int
    examiner: UserMinimalSchema | None
    moderator: UserMinimalSchema | None
    proposal_id: UUID | None
    assignments: list[ExaminerAssignmentSchema]
    evaluations: list[EvaluationSchema]


class ConfirmAssignmentSchema(Schema):
    accept: bool = True


class AssignExaminerSchema(Schema):
    examiner_id: UUID


class AssignExaminerResponseSchema(Schema):
    assignment: ExaminerAssignmentSchema
    created: bool


class EvaluationCreateSchema(Schema):
    grade: int
    comments: str = ""

    @field_validator("grade")
    @classmethod
    def grade_in_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("Grade must be between 0 and 100.")
        return v

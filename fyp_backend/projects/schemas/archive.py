"""
Archive view schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema

from fyp_backend.core.schemas import UserMinimalSchema
from fyp_backend.projects.schemas.projects import EvaluationSchema


class ArchivedProjectSchema(Schema):
    id: UUID
    title: str
    specialization: str
    project_type: str
    student: UserMinimalSchema | None
    supervisor: UserMinimalSchema | None
    archived_at: datetime
    evaluation_count: int
    average_grade: float | None


class ArchivedProjectDetailSchema(ArchivedProjectSchema):
    description: str
    expected_outcome: str
    evaluations: list[EvaluationSchema]

"""
Progress log and report schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import field_validator

from fyp_backend.core.schemas import UserMinimalSchema
from fyp_backend.progress.models import ReportType


class ProgressLogSchema(Schema):
    id: UUID
    project_id: UUID
    student: UserMinimalSchema
    title: str
    content: str
    status: str
    is_signed: bool
    created: datetime


class ProgressLogCreateSchema(Schema):
    project_id: UUID
    title: str
    content: str


class LogReviewSchema(Schema):
    comments: str
    signed: bool = False


class ProgressReportSchema(Schema):
    id: UUID
    project_id: UUID
    student: UserMinimalSchema
    title: str
    content: str
    report_type: str
    file_path: str
    original_filename: str
    status: str
    created: datetime


class ProgressReportCreateSchema(Schema):
    project_id: UUID
    title: str
    content: str = ""
    report_type: str = ReportType.PROGRESS
    file_path: str = ""
    original_filename: str = ""

    @field_validator("report_type")
    @classmethod
    def valid_report_type(cls, v: str) -> str:
        if v not in ReportType.values:
            raise ValueError(f"Invalid report type. Choices: {', '.join(ReportType.values)}")
        return v


class ReportReviewSchema(Schema):
    comments: str
    decision: str = "approve"
    grade: int | None = None

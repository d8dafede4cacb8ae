"""
Feedback schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema

from fyp_backend.core.schemas import UserMinimalSchema


class FeedbackSchema(Schema):
    id: UUID
    reviewer: UserMinimalSchema
    comments: str
    grade: int | None
    target_type: str
    created: datetime

    @staticmethod
    def from_feedback(feedback) -> "FeedbackSchema":
        return FeedbackSchema(
            id=feedback.id,
            reviewer=UserMinimalSchema.from_user(feedback.reviewer),
            comments=feedback.comments,
            grade=feedback.grade,
            target_type=feedback.target_type,
            created=feedback.created,
        )

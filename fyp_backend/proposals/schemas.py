"""
Proposal schemas for API requests and responses.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import field_validator

from fyp_backend.core.schemas import UserMinimalSchema
from fyp_backend.projects.models import ProjectType
from fyp_backend.proposals.lifecycle import Decision


class ProposalListSchema(Schema):
    """Schema for proposal list view."""

    id: UUID
    title: str
    proposal_type: str
    specialization: str
    status: str
    submitted_by: UserMinimalSchema
    submitted_to: UserMinimalSchema | None
    is_supervisor_proposal: bool
    created: datetime
    modified: datetime


class ProposalDetailSchema(ProposalListSchema):
    """Detailed proposal schema."""

    description: str
    expected_outcome: str
    has_been_approved: bool
    project_id: UUID | None
    forked_from_id: UUID | None


class ProposalCreateSchema(Schema):
    """Schema for submitting a proposal."""

    title: str
    description: str
    proposal_type: str
    specialization: str
    expected_outcome: str = ""
    target_supervisor_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("The title is required.")
        return v.strip()

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("The description is required.")
        return v.strip()

    @field_validator("proposal_type")
    @classmethod
    def valid_proposal_type(cls, v: str) -> str:
        if v not in ProjectType.values:
            raise ValueError(f"Invalid proposal type. Choices: {', '.join(ProjectType.values)}")
        return v


class ProposalUpdateSchema(Schema):
    """Schema for revising a proposal; omitted fields are kept."""

    title: str | None = None
    description: str | None = None
    proposal_type: str | None = None
    specialization: str | None = None
    expected_outcome: str | None = None


class ReviewSchema(Schema):
    decision: str
    comments: str | None = None

    @field_validator("decision")
    @classmethod
    def valid_decision(cls, v: str) -> str:
        choices = [d.value for d in Decision]
        if v not in choices:
            raise ValueError(f"Invalid decision. Choices: {', '.join(choices)}")
        return v

"""
Proposals API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post
from ninja_extra import http_put

from fyp_backend.core.api import BaseAPI
from fyp_backend.core.api import IsAuthenticated
from fyp_backend.core.exceptions import ErrorSchema
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.roles import Role
from fyp_backend.core.roles import user_has_role
from fyp_backend.core.schemas import UserMinimalSchema
from fyp_backend.feedback.schemas import FeedbackSchema
from fyp_backend.proposals import services
from fyp_backend.proposals.lifecycle import ProposalStatus
from fyp_backend.proposals.models import Proposal
from fyp_backend.proposals.schemas import ProposalCreateSchema
from fyp_backend.proposals.schemas import ProposalDetailSchema
from fyp_backend.proposals.schemas import ProposalListSchema
from fyp_backend.proposals.schemas import ProposalUpdateSchema
from fyp_backend.proposals.schemas import ReviewSchema


def proposal_to_list_schema(proposal: Proposal) -> ProposalListSchema:
    """Convert Proposal to list schema."""
    return ProposalListSchema(
        id=proposal.id,
        title=proposal.title,
        proposal_type=proposal.proposal_type,
        specialization=proposal.specialization,
        status=proposal.status,
        submitted_by=UserMinimalSchema.from_user(proposal.submitted_by),
        submitted_to=UserMinimalSchema.from_optional(proposal.submitted_to),
        is_supervisor_proposal=proposal.is_supervisor_proposal,
        created=proposal.created,
        modified=proposal.modified,
    )


def proposal_to_detail_schema(proposal: Proposal) -> ProposalDetailSchema:
    """Convert Proposal to detail schema."""
    return ProposalDetailSchema(
        **proposal_to_list_schema(proposal).model_dump(),
        description=proposal.description,
        expected_outcome=proposal.expected_outcome,
        has_been_approved=proposal.has_been_approved,
        project_id=proposal.project_id,
        forked_from_id=proposal.forked_from_id,
    )


@api_controller("/proposals", tags=["Proposals"], permissions=[IsAuthenticated])
class ProposalController(BaseAPI):
    """Submit, review and revise project proposals."""

    @http_get(
        "/",
        response={200: list[ProposalListSchema], 401: ErrorSchema},
        url_name="proposals_list",
    )
    def list_proposals(self, request: HttpRequest, status: str | None = None, queue: bool = False):
        """List proposals visible to the current user."""
        proposals = services.list_for_actor(request.user, status=status, queue=queue)
        return 200, [proposal_to_list_schema(p) for p in proposals]

    @http_post(
        "/",
        response={201: ProposalDetailSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 409: ErrorSchema},
        url_name="proposals_create",
    )
    def create_proposal(self, request: HttpRequest, data: ProposalCreateSchema):
        proposal = services.submit(request.user, **data.model_dump())
        return 201, proposal_to_detail_schema(proposal)

    @http_get(
        "/{proposal_id}",
        response={200: ProposalDetailSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="proposals_detail",
    )
    def get_proposal(self, request: HttpRequest, proposal_id: UUID):
        return 200, proposal_to_detail_schema(services.get_visible(request.user, proposal_id))

    @http_put(
        "/{proposal_id}",
        response={
            200: ProposalDetailSchema,
            400: ErrorSchema,
            401: ErrorSchema,
            403: ErrorSchema,
            404: ErrorSchema,
            409: ErrorSchema,
        },
        url_name="proposals_update",
    )
    def update_proposal(self, request: HttpRequest, proposal_id: UUID, data: ProposalUpdateSchema):
        """Revise a proposal. The response may be a new proposal forked from this one."""
        revised = services.edit(request.user, proposal_id, **data.model_dump(exclude_none=True))
        return 200, proposal_to_detail_schema(revised)

    @http_put(
        "/{proposal_id}/review",
        response={
            200: ProposalDetailSchema,
            400: ErrorSchema,
            401: ErrorSchema,
            403: ErrorSchema,
            404: ErrorSchema,
            409: ErrorSchema,
        },
        url_name="proposals_review",
    )
    def review_proposal(self, request: HttpRequest, proposal_id: UUID, data: ReviewSchema):
        """
        Review a proposal.

        The tier follows the reviewer and the status: the target supervisor
        reviews pending proposals, moderators give the final decision. A
        target who is also a moderator moderates once the first tier is done.
        """
        user = request.user
        target_id, status = (
            Proposal.objects.filter(id=proposal_id).values_list("submitted_to_id", "status").first()
            or (None, None)
        )
        if target_id == user.id and status == ProposalStatus.PENDING:
            reviewed = services.review_by_supervisor(user, proposal_id, data.decision, data.comments)
        elif user_has_role(user, Role.MODERATOR):
            reviewed = services.review_by_moderator(user, proposal_id, data.decision, data.comments)
        elif user_has_role(user, Role.SUPERVISOR):
            reviewed = services.review_by_supervisor(user, proposal_id, data.decision, data.comments)
        else:
            raise PermissionDeniedError("Only supervisors and moderators can review proposals.")
        return 200, proposal_to_detail_schema(reviewed)

    @http_get(
        "/{proposal_id}/feedback",
        response={200: list[FeedbackSchema], 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="proposals_feedback",
    )
    def proposal_feedback(self, request: HttpRequest, proposal_id: UUID):
        """Feedback on this proposal and the revisions it came from."""
        return 200, [FeedbackSchema.from_feedback(f) for f in services.feedback_history(request.user, proposal_id)]

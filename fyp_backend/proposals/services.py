"""
Proposal lifecycle services.

Submission, the two review tiers and revisions. Each operation checks the
actor's role, ownership and the proposal's status in that order, inside a
single transaction with the proposal row locked.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from fyp_backend.core.db import get_or_not_found
from fyp_backend.core.db import lock_or_not_found
from fyp_backend.core.exceptions import ConflictError
from fyp_backend.core.exceptions import InvalidTransitionError
from fyp_backend.core.exceptions import NotOwnerError
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.exceptions import ValidationError
from fyp_backend.core.fsm import run_transition
from fyp_backend.core.roles import Role
from fyp_backend.core.roles import is_manager
from fyp_backend.core.roles import require_role
from fyp_backend.core.roles import user_has_role
from fyp_backend.feedback.services import feedback_for
from fyp_backend.feedback.services import record_feedback
from fyp_backend.notifications.dispatcher import notify
from fyp_backend.notifications.dispatcher import notify_role
from fyp_backend.notifications.models import EventType
from fyp_backend.projects.models import Project
from fyp_backend.projects.models import ProjectType
from fyp_backend.projects.services import materialize

from .lifecycle import DECISION_EVENTS
from .lifecycle import Decision
from .lifecycle import ProposalStatus
from .lifecycle import Reviewer
from .lifecycle import resolve_target
from .models import Proposal

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "proposal_type", "specialization", "expected_outcome")
REQUIRED_FIELDS = ("title", "description", "specialization")

DECISION_VERBS = {
    Decision.APPROVE: "approved",
    Decision.REJECT: "rejected",
    Decision.MODIFY: "returned for modifications",
}


def _clean_fields(fields: dict, partial: bool = False) -> dict:
    cleaned = {}
    for name in EDITABLE_FIELDS:
        value = fields.get(name)
        if value is None:
            if not partial and name in REQUIRED_FIELDS + ("proposal_type",):
                raise ValidationError(f"The {name.replace('_', ' ')} is required.", details={"field": name})
            continue
        value = value.strip() if isinstance(value, str) else value
        if name in REQUIRED_FIELDS and not value:
            raise ValidationError(f"The {name.replace('_', ' ')} is required.", details={"field": name})
        cleaned[name] = value

    if "proposal_type" in cleaned and cleaned["proposal_type"] not in ProjectType.values:
        raise ValidationError(
            f"Invalid proposal type. Choices: {', '.join(ProjectType.values)}",
            details={"field": "proposal_type"},
        )
    return cleaned


def _as_decision(decision) -> Decision:
    try:
        return Decision(decision)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown decision '{decision}'.",
            details={"choices": [d.value for d in Decision]},
        ) from exc


def _check_can_submit(student) -> None:
    """Lock the student row and refuse a new proposal while they hold an active project."""
    # Serializes concurrent submissions from the same student.
    get_user_model().objects.select_for_update().filter(id=student.id).first()
    if Project.objects.active().filter(student=student).exists():
        raise ConflictError("You already have an active project.")


def _notify_reviewers(proposal: Proposal, event: EventType, message: str) -> None:
    """Send to the target supervisor, or to every moderator when there is none."""
    if proposal.submitted_to_id:
        notify(proposal.submitted_to, event, message)
    else:
        notify_role(Role.MODERATOR, event, message)


# Submission


@transaction.atomic
def submit(
    actor,
    *,
    title: str,
    description: str,
    proposal_type: str,
    specialization: str,
    expected_outcome: str = "",
    target_supervisor_id=None,
) -> Proposal:
    """
    Create a pending proposal.

    Students address a supervisor and may not submit while they own an
    active project. Supervisors propose projects of their own: the target
    is ignored and the moderators review it directly.
    """
    if user_has_role(actor, Role.STUDENT):
        as_student = True
    elif user_has_role(actor, Role.SUPERVISOR):
        as_student = False
    else:
        raise PermissionDeniedError("Only students and supervisors can submit proposals.")

    fields = _clean_fields(
        {
            "title": title,
            "description": description,
            "proposal_type": proposal_type,
            "specialization": specialization,
            "expected_outcome": expected_outcome or "",
        }
    )

    if as_student:
        User = get_user_model()
        target = User.objects.filter(id=target_supervisor_id).first() if target_supervisor_id else None
        if target is None or not user_has_role(target, Role.SUPERVISOR):
            raise ValidationError(
                "The proposal must be addressed to a supervisor.",
                details={"field": "target_supervisor_id"},
            )
        _check_can_submit(actor)
    else:
        target = None

    proposal = Proposal.objects.create(
        **fields,
        submitted_by=actor,
        submitted_to=target,
        is_supervisor_proposal=not as_student,
    )
    logger.info(
        "Proposal %s submitted by %s to %s",
        proposal.id,
        actor.email,
        target.email if target else "moderators",
    )

    _notify_reviewers(
        proposal,
        EventType.PROPOSAL_SUBMITTED,
        f'{actor.get_full_name()} submitted a new proposal: "{proposal.title}".',
    )
    return proposal


# Review


@transaction.atomic
def review_by_supervisor(supervisor, proposal_id, decision, comments: str | None = None) -> Proposal:
    """First-tier review of a student proposal by its target supervisor."""
    require_role(supervisor, Role.SUPERVISOR)
    decision = _as_decision(decision)

    proposal = lock_or_not_found(Proposal.objects, "Proposal", id=proposal_id)
    if proposal.submitted_to_id != supervisor.id:
        raise NotOwnerError("This proposal was not submitted to you.")

    resolve_target(proposal.status, Reviewer.SUPERVISOR, decision)
    run_transition(proposal, "supervisor_review", decision)

    if comments and comments.strip():
        record_feedback(supervisor, comments, proposal=proposal)

    logger.info("Supervisor %s: %s proposal %s -> %s", supervisor.email, decision.value, proposal.id, proposal.status)

    notify(
        proposal.submitted_by,
        DECISION_EVENTS[decision],
        f'Your proposal "{proposal.title}" was {DECISION_VERBS[decision]} by your supervisor.',
    )
    if decision is Decision.APPROVE:
        notify_role(
            Role.MODERATOR,
            EventType.PROPOSAL_SUBMITTED,
            f'"{proposal.title}" was approved by {supervisor.get_full_name()} and awaits moderation.',
        )
    return proposal


def is_supervisor_authored(proposal: Proposal) -> bool:
    return (
        proposal.is_supervisor_proposal
        and proposal.submitted_to_id is None
        and user_has_role(proposal.submitted_by, Role.SUPERVISOR)
    )


@transaction.atomic
def review_by_moderator(moderator, proposal_id, decision, comments: str | None = None) -> Proposal:
    """
    Final review.

    Approval materializes the project in the same transaction: if that fails
    (the student already has an active project) nothing is written.
    """
    require_role(moderator, Role.MODERATOR)
    decision = _as_decision(decision)

    proposal = lock_or_not_found(Proposal.objects, "Proposal", id=proposal_id)
    resolve_target(
        proposal.status,
        Reviewer.MODERATOR,
        decision,
        supervisor_authored=is_supervisor_authored(proposal),
    )

    run_transition(proposal, "moderator_review", decision, save=False)
    if decision is Decision.APPROVE:
        materialize(proposal, moderator)
    proposal.save()

    if comments and comments.strip():
        record_feedback(moderator, comments, proposal=proposal)

    logger.info("Moderator %s: %s proposal %s -> %s", moderator.email, decision.value, proposal.id, proposal.status)

    event = DECISION_EVENTS[decision]
    verb = DECISION_VERBS[decision]
    notify(proposal.submitted_by, event, f'Your proposal "{proposal.title}" was {verb} by the moderator.')
    if proposal.submitted_to_id:
        notify(
            proposal.submitted_to,
            event,
            f'The proposal "{proposal.title}" from {proposal.submitted_by.get_full_name()} was {verb} by the moderator.',
        )
    return proposal


# Revision


@transaction.atomic
def edit(actor, proposal_id, **fields) -> Proposal:
    """
    Revise a proposal.

    A proposal that never reached an approved tier is updated in place and
    goes back to pending. Otherwise the revision is a new proposal pointing
    at the original through `forked_from`, and the original is left as is.
    A proposal is forked once; later revisions go through the fork, and a
    student fork obeys the same active-project rule as a new submission.

    Returns the proposal that now carries the revision.
    """
    proposal = lock_or_not_found(Proposal.objects, "Proposal", id=proposal_id)
    if proposal.submitted_by_id != actor.id:
        raise NotOwnerError("Only the author can edit this proposal.")
    if not proposal.is_editable:
        raise InvalidTransitionError(
            f"A proposal in status '{proposal.status}' cannot be edited.",
            details={"status": str(proposal.status)},
        )

    changes = _clean_fields(fields, partial=True)

    if proposal.must_fork:
        latest = proposal.forks.order_by("-created").first()
        if latest is not None:
            raise InvalidTransitionError(
                "This proposal was already revised; edit the latest revision instead.",
                details={"revision": str(latest.id)},
            )
        if not proposal.is_supervisor_proposal:
            _check_can_submit(actor)

        values ={name: getattr(proposal, name) for name in EDITABLE_FIELDS}
        values.update(changes)
        revised = Proposal.objects.create(
            **values,
            submitted_by=proposal.submitted_by,
            submitted_to=proposal.submitted_to,
            is_supervisor_proposal=proposal.is_supervisor_proposal,
            forked_from=proposal,
        )
        logger.info("Proposal %s revised as new proposal %s", proposal.id, revised.id)
    else:
        for name, value in changes.items():
            setattr(proposal, name, value)
        run_transition(proposal, "resubmit")
        revised = proposal
        logger.info("Proposal %s edited in place", proposal.id)

    _notify_reviewers(
        revised,
        EventType.PROPOSAL_MODIFIED,
        f'{actor.get_full_name()} modified the proposal "{revised.title}".',
    )
    return revised


# Reads


def list_for_actor(actor, status: str | None = None, queue: bool = False):
    """
    Proposals visible to the actor.

    Students and supervisors see what they submitted or received. Managers
    and moderators see everything; with `queue` a moderator only gets what
    currently waits for a moderator decision.
    """
    proposals = Proposal.objects.select_related("submitted_by", "submitted_to")

    if queue and user_has_role(actor, Role.MODERATOR):
        proposals = proposals.filter(
            Q(status=ProposalStatus.SUPERVISOR_APPROVED)
            | Q(status=ProposalStatus.PENDING, is_supervisor_proposal=True, submitted_to__isnull=True)
        )
    elif not (is_manager(actor) or user_has_role(actor, Role.MODERATOR)):
        proposals = proposals.filter(Q(submitted_by=actor) | Q(submitted_to=actor))

    if status:
        proposals = proposals.filter(status=status)
    return proposals


def get_visible(actor, proposal_id) -> Proposal:
    proposal = get_or_not_found(
        Proposal.objects.select_related("submitted_by", "submitted_to"),
        "Proposal",
        id=proposal_id,
    )
    if not proposal.can_be_viewed_by(actor):
        raise PermissionDeniedError("You cannot view this proposal.")
    return proposal


def feedback_history(actor, proposal_id):
    """Feedback left on the proposal and on the revisions it was forked from."""
    proposal = get_visible(actor, proposal_id)
    chain = [proposal]
    seen = {proposal.id}
    while chain[-1].forked_from_id and chain[-1].forked_from_id not in seen:
        parent = Proposal.objects.get(id=chain[-1].forked_from_id)
        seen.add(parent.id)
        chain.append(parent)
    return [feedback for item in chain for feedback in feedback_for(proposal=item)]

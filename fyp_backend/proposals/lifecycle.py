"""
Proposal state machine.

Every review decision goes through TRANSITIONS: a (reviewer tier, decision)
pair maps to the statuses it may start from and the status it produces.
Anything not listed is illegal. The model's django-fsm transitions and the
service layer both read from this table.

    pending --supervisor--> supervisor_approved | supervisor_rejected | modifications_required
    supervisor_approved --moderator--> approved | rejected | modifications_required
    pending (supervisor-authored) --moderator--> approved | rejected | modifications_required
"""

from dataclasses import dataclass
from enum import Enum

from django.db import models
from django.utils.translation import gettext_lazy as _

from fyp_backend.core.exceptions import InvalidTransitionError
from fyp_backend.core.roles import Role


class ProposalStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    SUPERVISOR_APPROVED = "supervisor_approved", _("Supervisor approved")
    SUPERVISOR_REJECTED = "supervisor_rejected", _("Supervisor rejected")
    MODIFICATIONS_REQUIRED = "modifications_required", _("Modifications required")
    APPROVED = "approved", _("Approved")
    REJECTED = "rejected", _("Rejected")


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    MODIFY = "modify"


class Reviewer(str, Enum):
    SUPERVISOR = "supervisor"
    MODERATOR = "moderator"


@dataclass(frozen=True)
class Rule:
    sources: frozenset[str]
    target: str


TRANSITIONS: dict[tuple[Reviewer, Decision], Rule] = {
    (Reviewer.SUPERVISOR, Decision.APPROVE): Rule(
        frozenset({ProposalStatus.PENDING}), ProposalStatus.SUPERVISOR_APPROVED
    ),
    (Reviewer.SUPERVISOR, Decision.REJECT): Rule(
        frozenset({ProposalStatus.PENDING}), ProposalStatus.SUPERVISOR_REJECTED
    ),
    (Reviewer.SUPERVISOR, Decision.MODIFY): Rule(
        frozenset({ProposalStatus.PENDING}), ProposalStatus.MODIFICATIONS_REQUIRED
    ),
    (Reviewer.MODERATOR, Decision.APPROVE): Rule(
        frozenset({ProposalStatus.SUPERVISOR_APPROVED}), ProposalStatus.APPROVED
    ),
    (Reviewer.MODERATOR, Decision.REJECT): Rule(
        frozenset({ProposalStatus.SUPERVISOR_APPROVED}), ProposalStatus.REJECTED
    ),
    (Reviewer.MODERATOR, Decision.MODIFY): Rule(
        frozenset({ProposalStatus.SUPERVISOR_APPROVED}), ProposalStatus.MODIFICATIONS_REQUIRED
    ),
}

# Supervisor-authored proposals skip the supervisor tier: the moderator
# reviews them straight from pending.
SUPERVISOR_AUTHORED_MODERATOR_SOURCES = frozenset({ProposalStatus.PENDING})

# Statuses the submitter may still revise.
EDITABLE_STATUSES = frozenset(
    {
        ProposalStatus.PENDING,
        ProposalStatus.MODIFICATIONS_REQUIRED,
        ProposalStatus.SUPERVISOR_REJECTED,
    }
)

# Reaching one of these makes any later revision a fork.
APPROVED_TIER = frozenset({ProposalStatus.SUPERVISOR_APPROVED, ProposalStatus.APPROVED})

ROLE_TO_REVIEWER = {
    Role.SUPERVISOR: Reviewer.SUPERVISOR,
    Role.MODERATOR: Reviewer.MODERATOR,
}

DECISION_EVENTS = {
    Decision.APPROVE: "proposal_approved",
    Decision.REJECT: "proposal_rejected",
    Decision.MODIFY: "proposal_needs_modification",
}


def _as_reviewer(role: Role | Reviewer | str) -> Reviewer | None:
    if isinstance(role, Reviewer):
        return role
    try:
        return ROLE_TO_REVIEWER.get(Role(role))
    except ValueError:
        try:
            return Reviewer(role)
        except ValueError:
            return None


def rule_for(
    role: Role | Reviewer | str,
    decision: Decision | str,
    supervisor_authored: bool = False,
) -> Rule | None:
    """Return the rule for a review, or None when the tier/decision pair is unknown."""
    reviewer = _as_reviewer(role)
    try:
        decision = Decision(decision)
    except ValueError:
        return None
    if reviewer is None:
        return None
    if supervisor_authored:
        if reviewer is not Reviewer.MODERATOR:
            return None
        rule = TRANSITIONS[(reviewer, decision)]
        return Rule(SUPERVISOR_AUTHORED_MODERATOR_SOURCES, rule.target)
    return TRANSITIONS[(reviewer, decision)]


def can_transition(
    status: str,
    role: Role | Reviewer | str,
    decision: Decision | str,
    supervisor_authored: bool = False,
) -> bool:
    rule = rule_for(role, decision, supervisor_authored)
    return rule is not None and status in rule.sources


def resolve_target(
    status: str,
    role: Role | Reviewer | str,
    decision: Decision | str,
    supervisor_authored: bool = False,
) -> str:
    """Return the status a review produces, raising InvalidTransitionError if illegal."""
    rule = rule_for(role, decision, supervisor_authored)
    if rule is None or status not in rule.sources:
        decision_label = getattr(decision, "value", decision)
        stage = getattr(_as_reviewer(role), "value", role)
        raise InvalidTransitionError(
            f"Cannot {decision_label} a proposal in status '{status}' at the {stage} review stage.",
            details={"status": str(status), "decision": str(decision_label)},
        )
    return rule.target


def is_editable(status: str) -> bool:
    return status in EDITABLE_STATUSES

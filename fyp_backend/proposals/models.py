"""
Models for project proposals.
"""

import logging

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _
from django_fsm import RETURN_VALUE
from django_fsm import FSMField
from django_fsm import transition

from fyp_backend.core.models import BaseModel
from fyp_backend.core.roles import Role
from fyp_backend.core.roles import is_manager
from fyp_backend.core.roles import user_has_role
from fyp_backend.projects.models import ProjectType

from .lifecycle import APPROVED_TIER
from .lifecycle import EDITABLE_STATUSES
from .lifecycle import SUPERVISOR_AUTHORED_MODERATOR_SOURCES
from .lifecycle import TRANSITIONS
from .lifecycle import Decision
from .lifecycle import ProposalStatus
from .lifecycle import Reviewer

logger = logging.getLogger(__name__)


def _sources(reviewer: Reviewer) -> list[str]:
    sources: set[str] = set()
    for (tier, _decision), rule in TRANSITIONS.items():
        if tier is reviewer:
            sources |= rule.sources
    if reviewer is Reviewer.MODERATOR:
        sources |= SUPERVISOR_AUTHORED_MODERATOR_SOURCES
    return sorted(sources)


def _targets(reviewer: Reviewer) -> list[str]:
    return sorted({rule.target for (tier, _d), rule in TRANSITIONS.items() if tier is reviewer})


class Proposal(BaseModel):
    """
    A request to create a project, moving through the review chain.

    Student proposals are reviewed by their target supervisor, then by a
    moderator. Supervisor proposals have no target and go straight to the
    moderators. Approval by a moderator materializes the Project and links
    it through `project`.
    """

    title = models.CharField(_("title"), max_length=255)
    description = models.TextField(_("description"))
    proposal_type = models.CharField(
        _("type"),
        max_length=20,
        choices=ProjectType.choices,
    )
    specialization = models.CharField(_("specialization"), max_length=150)
    expected_outcome = models.TextField(_("expected outcome"), blank=True)

    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="submitted_proposals",
        verbose_name=_("submitted by"),
    )
    submitted_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="received_proposals",
        verbose_name=_("submitted to"),
        help_text=_("Target supervisor; empty for supervisor-authored proposals"),
    )
    is_supervisor_proposal = models.BooleanField(_("supervisor proposal"), default=False)

    status = FSMField(
        _("status"),
        default=ProposalStatus.PENDING,
        choices=ProposalStatus.choices,
        protected=True,
    )
    has_been_approved = models.BooleanField(
        _("has been approved"),
        default=False,
        help_text=_("Reached supervisor_approved or approved at least once"),
    )

    project = models.OneToOneField(
        "projects.Project",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="proposal",
        verbose_name=_("project"),
    )
    forked_from = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="forks",
        verbose_name=_("forked from"),
    )

    class Meta:
        verbose_name = _("proposal")
        verbose_name_plural = _("proposals")
        ordering = ["-created"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    ~models.Q(status=ProposalStatus.APPROVED) | models.Q(project__isnull=False)
                ),
                name="approved_proposal_has_project",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.get_status_display()})"

    # FSM Transitions

    @transition(
        field=status,
        source=_sources(Reviewer.SUPERVISOR),
        target=RETURN_VALUE(*_targets(Reviewer.SUPERVISOR)),
    )
    def supervisor_review(self, decision: Decision) -> str:
        target = TRANSITIONS[(Reviewer.SUPERVISOR, Decision(decision))].target
        if target in APPROVED_TIER:
            self.has_been_approved = True
        return target

    @transition(
        field=status,
        source=_sources(Reviewer.MODERATOR),
        target=RETURN_VALUE(*_targets(Reviewer.MODERATOR)),
    )
    def moderator_review(self, decision: Decision) -> str:
        target = TRANSITIONS[(Reviewer.MODERATOR, Decision(decision))].target
        if target in APPROVED_TIER:
            self.has_been_approved = True
        return target

    @transition(field=status, source=sorted(EDITABLE_STATUSES), target=ProposalStatus.PENDING)
    def resubmit(self):
        """Back to pending after an in-place edit."""

    # Helper methods

    @property
    def is_editable(self) -> bool:
        return self.status in EDITABLE_STATUSES

    @property
    def must_fork(self) -> bool:
        """Revisions of a proposal that was ever approved become new rows."""
        return self.has_been_approved

    def can_be_viewed_by(self, user) -> bool:
        if user.id in (self.submitted_by_id, self.submitted_to_id):
            return True
        return is_manager(user) or user_has_role(user, Role.MODERATOR)

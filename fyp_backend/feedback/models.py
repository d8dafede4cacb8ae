"""
Reviewer feedback attached to a proposal, a progress log or a progress report.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from fyp_backend.core.models import BaseModel


class FeedbackTarget(models.TextChoices):
    PROPOSAL = "proposal", _("Proposal")
    LOG = "log", _("Progress log")
    REPORT = "report", _("Progress report")


class Feedback(BaseModel):
    """
    Append-only review comment.

    Exactly one of proposal / log / report is set.
    """

    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="authored_feedback",
        verbose_name=_("reviewer"),
    )
    comments = models.TextField(_("comments"))
    grade = models.PositiveSmallIntegerField(
        _("grade"),
        null=True,
        blank=True,
        validators=[MaxValueValidator(100)],
    )

    proposal = models.ForeignKey(
        "proposals.Proposal",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="feedback",
    )
    log = models.ForeignKey(
        "progress.ProgressLog",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="feedback",
    )
    report = models.ForeignKey(
        "progress.ProgressReport",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="feedback",
    )

    class Meta:
        verbose_name = _("feedback")
        verbose_name_plural = _("feedback")
        ordering = ["-created"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(proposal__isnull=False, log__isnull=True, report__isnull=True)
                    | models.Q(proposal__isnull=True, log__isnull=False, report__isnull=True)
                    | models.Q(proposal__isnull=True, log__isnull=True, report__isnull=False)
                ),
                name="feedback_single_target",
            ),
        ]

    def __str__(self) -> str:
        return f"Feedback by {self.reviewer} on {self.target_type}"

    @property
    def target_type(self) -> str:
        if self.proposal_id:
            return FeedbackTarget.PROPOSAL
        if self.log_id:
            return FeedbackTarget.LOG
        return FeedbackTarget.REPORT

    @property
    def target(self):
        return self.proposal or self.log or self.report

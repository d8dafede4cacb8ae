"""
Durable in-app notifications.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from fyp_backend.core.models import BaseModel


class EventType(models.TextChoices):
    PROPOSAL_SUBMITTED = "proposal_submitted", _("Proposal submitted")
    PROPOSAL_APPROVED = "proposal_approved", _("Proposal approved")
    PROPOSAL_REJECTED = "proposal_rejected", _("Proposal rejected")
    PROPOSAL_NEEDS_MODIFICATION = "proposal_needs_modification", _("Proposal needs modification")
    PROPOSAL_MODIFIED = "proposal_modified", _("Proposal modified")
    FEEDBACK_RECEIVED = "feedback_received", _("Feedback received")
    UPCOMING_DEADLINE = "upcoming_deadline", _("Upcoming deadline")
    LOG_SUBMITTED = "log_submitted", _("Progress log submitted")
    REPORT_SUBMITTED = "report_submitted", _("Report submitted")
    EXAMINER_ASSIGNED = "examiner_assigned", _("Examiner assigned")
    GRADE_SUBMITTED = "grade_submitted", _("Grade submitted")
    PROJECT_CLAIMED = "project_claimed", _("Project claimed")


class NotificationQuerySet(models.QuerySet):
    def unread(self):
        return self.filter(is_read=False)

    def for_user(self, user):
        return self.filter(user=user)


class Notification(BaseModel):
    """
    Append-only event record for one user.

    `is_read` is the only field that changes after insert.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="notifications",
        verbose_name=_("user"),
    )
    event_type = models.CharField(
        _("event type"),
        max_length=40,
        choices=EventType.choices,
    )
    message = models.TextField(_("message"))
    is_read = models.BooleanField(_("read"), default=False)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        verbose_name = _("notification")
        verbose_name_plural = _("notifications")
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_unread_idx"),
        ]

    def __str__(self) -> str:
        return f"[{self.event_type}] {self.user}: {self.message[:50]}"

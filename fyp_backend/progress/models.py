"""
Progress logs and reports submitted against a project.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from fyp_backend.core.models import BaseModel


class LogStatus(models.TextChoices):
    SUBMITTED = "submitted", _("Submitted")
    REVIEWED = "reviewed", _("Reviewed")


class ProgressLog(BaseModel):
    """Weekly log of what the student worked on."""

    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="progress_logs",
        verbose_name=_("project"),
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="progress_logs",
        verbose_name=_("student"),
    )
    title = models.CharField(_("title"), max_length=255)
    content = models.TextField(_("content"))
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=LogStatus.choices,
        default=LogStatus.SUBMITTED,
    )
    is_signed = models.BooleanField(
        _("signed"),
        default=False,
        help_text=_("Signed off by the supervisor"),
    )

    class Meta:
        verbose_name = _("progress log")
        verbose_name_plural = _("progress logs")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.title} - {self.student}"


class ReportType(models.TextChoices):
    PROGRESS = "progress", _("Progress report")
    FINAL = "final", _("Final report")


class ReportStatus(models.TextChoices):
    SUBMITTED = "submitted", _("Submitted")
    APPROVED = "approved", _("Approved")
    REVISION_REQUESTED = "revision_requested", _("Revision requested")


class ProgressReport(BaseModel):
    """
    Report submitted by the student.

    Only the reference to the uploaded file is stored; the bytes live in
    whatever storage the upload layer uses.
    """

    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="progress_reports",
        verbose_name=_("project"),
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="progress_reports",
        verbose_name=_("student"),
    )
    title = models.CharField(_("title"), max_length=255)
    content = models.TextField(_("content"), blank=True)
    report_type = models.CharField(
        _("type"),
        max_length=20,
        choices=ReportType.choices,
        default=ReportType.PROGRESS,
    )
    file_path = models.CharField(_("file path"), max_length=500, blank=True)
    original_filename = models.CharField(_("original filename"), max_length=255, blank=True)
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=ReportStatus.choices,
        default=ReportStatus.SUBMITTED,
    )

    class Meta:
        verbose_name = _("progress report")
        verbose_name_plural = _("progress reports")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.title} - {self.student}"

    @property
    def is_final(self) -> bool:
        return self.report_type == ReportType.FINAL

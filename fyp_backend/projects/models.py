"""
Models for materialized projects and their examination.

Contains:
- Project: the project row created from an approved proposal
- ExaminerAssignment: which examiner evaluates which project
- Evaluation: the grade an examiner gives a project
"""

import logging

from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from django_fsm import FSMField
from django_fsm import transition

from fyp_backend.core.models import BaseModel

logger = logging.getLogger(__name__)


class ProjectType(models.TextChoices):
    """Nature of the work, shared by proposals and projects."""

    RESEARCH = "research", _("Research")
    APPLICATION = "application", _("Application")
    BOTH = "both", _("Both")


class ProjectStatus(models.TextChoices):
    """Status choices for projects (FSM states)."""

    AVAILABLE = "available", _("Available")  # Supervisor project, no student yet
    ASSIGNED = "assigned", _("Assigned")  # Claimed by a student, awaiting supervisor
    APPROVED = "approved", _("Approved")  # Being worked on
    READY_FOR_EXAMINATION = "ready_for_examination", _("Ready for examination")
    ARCHIVED = "archived", _("Archived")


# Statuses in which a project occupies its student.
ACTIVE_STATUSES = [
    ProjectStatus.ASSIGNED,
    ProjectStatus.APPROVED,
    ProjectStatus.READY_FOR_EXAMINATION,
]

# Statuses in which examiners may be assigned and progress may be logged.
EXAMINABLE_STATUSES = [
    ProjectStatus.APPROVED,
    ProjectStatus.READY_FOR_EXAMINATION,
]


class ProjectQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status__in=ACTIVE_STATUSES)

    def available(self):
        return self.filter(status=ProjectStatus.AVAILABLE)

    def archived(self):
        return self.filter(status=ProjectStatus.ARCHIVED)


class Project(BaseModel):
    """
    A final-year project.

    Created exactly once per approved proposal. The FSM goes:
    - available: supervisor-proposed project waiting for a student
    - assigned: a student claimed it, the supervisor has to confirm
    - approved: work in progress
    - ready_for_examination: final report approved by the supervisor
    - archived: evaluation completed, kept for the archive views
    """

    title = models.CharField(_("title"), max_length=255)
    description = models.TextField(_("description"))
    specialization = models.CharField(_("specialization"), max_length=150, blank=True)
    project_type = models.CharField(
        _("type"),
        max_length=20,
        choices=ProjectType.choices,
        default=ProjectType.APPLICATION,
    )
    expected_outcome = models.TextField(_("expected outcome"), blank=True)
    capacity = models.PositiveSmallIntegerField(_("capacity"), default=1)

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="projects_as_student",
        verbose_name=_("student"),
    )
    supervisor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="projects_as_supervisor",
        verbose_name=_("supervisor"),
    )
    examiner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="projects_as_examiner",
        verbose_name=_("examiner"),
        help_text=_("First examiner assigned; the full list is in ExaminerAssignment"),
    )
    moderator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="projects_as_moderator",
        verbose_name=_("moderator"),
    )

    status = FSMField(
        _("status"),
        default=ProjectStatus.AVAILABLE,
        choices=ProjectStatus.choices,
        protected=True,
    )

    objects = ProjectQuerySet.as_manager()

    class Meta:
        verbose_name = _("project")
        verbose_name_plural = _("projects")
        ordering = ["-created"]
        constraints = [
            models.UniqueConstraint(
                fields=["student"],
                condition=models.Q(status__in=ACTIVE_STATUSES),
                name="one_active_project_per_student",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.get_status_display()})"

    # FSM Transitions

    @transition(field=status, source=ProjectStatus.AVAILABLE, target=ProjectStatus.ASSIGNED)
    def claim(self, student):
        """A student picks an available supervisor project."""
        self.student = student

    @transition(field=status, source=ProjectStatus.ASSIGNED, target=ProjectStatus.AVAILABLE)
    def release(self):
        """The supervisor turns the claim down."""
        self.student = None

    @transition(field=status, source=ProjectStatus.ASSIGNED, target=ProjectStatus.APPROVED)
    def confirm_assignment(self):
        pass

    @transition(
        field=status,
        source=ProjectStatus.APPROVED,
        target=ProjectStatus.READY_FOR_EXAMINATION,
    )
    def mark_ready_for_examination(self):
        pass

    def evaluation_completed(self) -> bool:
        """At least one examiner assigned and every assignment completed."""
        assignments = self.examiner_assignments.all()
        return assignments.exists() and not assignments.exclude(
            status=AssignmentStatus.COMPLETED
        ).exists()

    @transition(
        field=status,
        source=EXAMINABLE_STATUSES,
        target=ProjectStatus.ARCHIVED,
        conditions=[evaluation_completed],
    )
    def archive(self):
        pass

    # Helper methods

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def accepts_examiners(self) -> bool:
        return self.status in EXAMINABLE_STATUSES

    def is_member(self, user) -> bool:
        """Student, supervisor, moderator or one of the examiners."""
        if user.id in (self.student_id, self.supervisor_id, self.moderator_id):
            return True
        return self.examiner_assignments.filter(examiner=user).exists()


class AssignmentStatus(models.TextChoices):
    ASSIGNED = "assigned", _("Assigned")
    COMPLETED = "completed", _("Completed")


class ExaminerAssignment(BaseModel):
    """
    Join row recording which examiner evaluates which project.

    Exactly one row per (project, examiner) pair, enforced by the database.
    """

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="examiner_assignments",
        verbose_name=_("project"),
    )
    examiner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="examiner_assignments",
        verbose_name=_("examiner"),
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name=_("assigned by"),
    )
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=AssignmentStatus.choices,
        default=AssignmentStatus.ASSIGNED,
    )

    class Meta:
        verbose_name = _("examiner assignment")
        verbose_name_plural = _("examiner assignments")
        ordering = ["created"]
        constraints = [
            models.UniqueConstraint(
                fields=["project", "examiner"],
                name="unique_examiner_per_project",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.examiner} -> {self.project.title}"


class Evaluation(BaseModel):
    """Grade and comments an examiner gives an assigned project."""

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="evaluations",
        verbose_name=_("project"),
    )
    examiner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="evaluations",
        verbose_name=_("examiner"),
    )
    grade = models.PositiveSmallIntegerField(
        _("grade"),
        validators=[MaxValueValidator(100)],
    )
    comments = models.TextField(_("comments"), blank=True)

    class Meta:
        verbose_name = _("evaluation")
        verbose_name_plural = _("evaluations")
        ordering = ["-created"]
        constraints = [
            models.UniqueConstraint(
                fields=["project", "examiner"],
                name="unique_evaluation_per_examiner",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.project.title}: {self.grade}"

import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import django_fsm
import model_utils.fields
from django.conf import settings
from django.db import migrations
from django.db import models

PROJECT_TYPES = [("research", "Research"), ("application", "Application"), ("both", "Both")]


def _base_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        (
            "created",
            model_utils.fields.AutoCreatedField(
                default=django.utils.timezone.now, editable=False, verbose_name="created"
            ),
        ),
        (
            "modified",
            model_utils.fields.AutoLastModifiedField(
                default=django.utils.timezone.now, editable=False, verbose_name="modified"
            ),
        ),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                *_base_fields(),
                ("title", models.CharField(max_length=255, verbose_name="title")),
                ("description", models.TextField(verbose_name="description")),
                ("specialization", models.CharField(blank=True, max_length=150, verbose_name="specialization")),
                (
                    "project_type",
                    models.CharField(
                        choices=PROJECT_TYPES, default="application", max_length=20, verbose_name="type"
                    ),
                ),
                ("expected_outcome", models.TextField(blank=True, verbose_name="expected outcome")),
                ("capacity", models.PositiveSmallIntegerField(default=1, verbose_name="capacity")),
                (
                    "status",
                    django_fsm.FSMField(
                        choices=[
                            ("available", "Available"),
                            ("assigned", "Assigned"),
                            ("approved", "Approved"),
                            ("ready_for_examination", "Ready for examination"),
                            ("archived", "Archived"),
                        ],
                        default="available",
                        max_length=50,
                        protected=True,
                        verbose_name="status",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="projects_as_student",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="student",
                    ),
                ),
                (
                    "supervisor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="projects_as_supervisor",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="supervisor",
                    ),
                ),
                (
                    "examiner",
                    models.ForeignKey(
                        blank=True,
                        help_text="First examiner assigned; the full list is in ExaminerAssignment",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="projects_as_examiner",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="examiner",
                    ),
                ),
                (
                    "moderator",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="projects_as_moderator",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="moderator",
                    ),
                ),
            ],
            options={
                "verbose_name": "project",
                "verbose_name_plural": "projects",
                "ordering": ["-created"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(status__in=["assigned", "approved", "ready_for_examination"]),
                        fields=("student",),
                        name="one_active_project_per_student",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ExaminerAssignment",
            fields=[
                *_base_fields(),
                (
                    "status",
                    models.CharField(
                        choices=[("assigned", "Assigned"), ("completed", "Completed")],
                        default="assigned",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="examiner_assignments",
                        to="projects.project",
                        verbose_name="project",
                    ),
                ),
                (
                    "examiner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="examiner_assignments",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="examiner",
                    ),
                ),
                (
                    "assigned_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="assigned by",
                    ),
                ),
            ],
            options={
                "verbose_name": "examiner assignment",
                "verbose_name_plural": "examiner assignments",
                "ordering": ["created"],
                "constraints": [
                    models.UniqueConstraint(fields=("project", "examiner"), name="unique_examiner_per_project"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Evaluation",
            fields=[
                *_base_fields(),
                (
                    "grade",
                    models.PositiveSmallIntegerField(
                        validators=[django.core.validators.MaxValueValidator(100)], verbose_name="grade"
                    ),
                ),
                ("comments", models.TextField(blank=True, verbose_name="comments")),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="evaluations",
                        to="projects.project",
                        verbose_name="project",
                    ),
                ),
                (
                    "examiner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="evaluations",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="examiner",
                    ),
                ),
            ],
            options={
                "verbose_name": "evaluation",
                "verbose_name_plural": "evaluations",
                "ordering": ["-created"],
                "constraints": [
                    models.UniqueConstraint(fields=("project", "examiner"), name="unique_evaluation_per_examiner"),
                ],
            },
        ),
    ]

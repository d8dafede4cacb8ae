import uuid

import django.db.models.deletion
import django.utils.timezone
import django_fsm
import model_utils.fields
from django.conf import settings
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("projects", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Proposal",
            fields=[
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
                ("title", models.CharField(max_length=255, verbose_name="title")),
                ("description", models.TextField(verbose_name="description")),
                (
                    "proposal_type",
                    models.CharField(
                        choices=[("research", "Research"), ("application", "Application"), ("both", "Both")],
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                ("specialization", models.CharField(max_length=150, verbose_name="specialization")),
                ("expected_outcome", models.TextField(blank=True, verbose_name="expected outcome")),
                ("is_supervisor_proposal", models.BooleanField(default=False, verbose_name="supervisor proposal")),
                (
                    "status",
                    django_fsm.FSMField(
                        choices=[
                            ("pending", "Pending"),
                            ("supervisor_approved", "Supervisor approved"),
                            ("supervisor_rejected", "Supervisor rejected"),
                            ("modifications_required", "Modifications required"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=50,
                        protected=True,
                        verbose_name="status",
                    ),
                ),
                (
                    "has_been_approved",
                    models.BooleanField(
                        default=False,
                        help_text="Reached supervisor_approved or approved at least once",
                        verbose_name="has been approved",
                    ),
                ),
                (
                    "submitted_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="submitted_proposals",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="submitted by",
                    ),
                ),
                (
                    "submitted_to",
                    models.ForeignKey(
                        blank=True,
                        help_text="Target supervisor; empty for supervisor-authored proposals",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="received_proposals",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="submitted to",
                    ),
                ),
                (
                    "project",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="proposal",
                        to="projects.project",
                        verbose_name="project",
                    ),
                ),
                (
                    "forked_from",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="forks",
                        to="proposals.proposal",
                        verbose_name="forked from",
                    ),
                ),
            ],
            options={
                "verbose_name": "proposal",
                "verbose_name_plural": "proposals",
                "ordering": ["-created"],
                "constraints": [
                    models.CheckConstraint(
                        condition=~models.Q(status="approved") | models.Q(project__isnull=False),
                        name="approved_proposal_has_project",
                    ),
                ],
            },
        ),
    ]

import uuid

import django.db.models.deletion
import django.utils.timezone
import model_utils.fields
from django.conf import settings
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
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
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("proposal_submitted", "Proposal submitted"),
                            ("proposal_approved", "Proposal approved"),
                            ("proposal_rejected", "Proposal rejected"),
                            ("proposal_needs_modification", "Proposal needs modification"),
                            ("proposal_modified", "Proposal modified"),
                            ("feedback_received", "Feedback received"),
                            ("upcoming_deadline", "Upcoming deadline"),
                            ("log_submitted", "Progress log submitted"),
                            ("report_submitted", "Report submitted"),
                            ("examiner_assigned", "Examiner assigned"),
                            ("grade_submitted", "Grade submitted"),
                        ],
                        max_length=40,
                        verbose_name="event type",
                    ),
                ),
                ("message", models.TextField(verbose_name="message")),
                ("is_read", models.BooleanField(default=False, verbose_name="read")),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="user",
                    ),
                ),
            ],
            options={
                "verbose_name": "notification",
                "verbose_name_plural": "notifications",
                "ordering": ["-created"],
                "indexes": [
                    models.Index(fields=["user", "is_read"], name="notification_user_unread_idx"),
                ],
            },
        ),
    ]

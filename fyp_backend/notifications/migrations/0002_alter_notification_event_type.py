from django.db import migrations
from django.db import models


class Migration(migrations.Migration):
    dependencies = [
        ("notifications", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="notification",
            name="event_type",
            field=models.CharField(
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
                    ("project_claimed", "Project claimed"),
                ],
                max_length=40,
                verbose_name="event type",
            ),
        ),
    ]

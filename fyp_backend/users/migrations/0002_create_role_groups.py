"""
Data migration creating the five role groups.

Groups:
- Student: submits proposals, progress logs and reports
- Supervisor: reviews student proposals, proposes projects, reviews progress
- Moderator: final decision on proposals
- Examiner: evaluates assigned projects
- Manager: administers users, examiners and the archive
"""

from django.db import migrations

ROLES = ["Student", "Supervisor", "Moderator", "Examiner", "Manager"]


def create_role_groups(apps, schema_editor):
    Group = apps.get_model("auth", "Group")
    for role_name in ROLES:
        Group.objects.get_or_create(name=role_name)


def remove_role_groups(apps, schema_editor):
    Group = apps.get_model("auth", "Group")
    Group.objects.filter(name__in=ROLES).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("users", "0001_initial"),
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.RunPython(create_role_groups, remove_role_groups),
    ]

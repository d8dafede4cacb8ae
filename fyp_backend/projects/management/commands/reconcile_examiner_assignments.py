"""
Remove duplicate examiner assignments left over from imported data.

Usage:
    python manage.py reconcile_examiner_assignments
"""

from django.core.management.base import BaseCommand

from fyp_backend.projects.services import remove_duplicate_assignments


class Command(BaseCommand):
    help = "Delete duplicate (project, examiner) assignments, keeping the oldest"

    def handle(self, *args, **options):
        removed = remove_duplicate_assignments()
        if removed:
            self.stdout.write(self.style.WARNING(f"Removed {removed} duplicate assignment(s)."))
        else:
            self.stdout.write(self.style.SUCCESS("No duplicate assignments found."))

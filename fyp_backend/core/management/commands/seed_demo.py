"""
Seed command to populate database with demo data for frontend development.

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --clear  # Clear existing demo data first
"""

import logging

from django.contrib.auth.models import Group as AuthGroup
from django.core.management.base import BaseCommand
from django.db import transaction

from fyp_backend.core.roles import Role
from fyp_backend.projects import services as project_services
from fyp_backend.projects.models import Project
from fyp_backend.proposals import services as proposal_services
from fyp_backend.proposals.lifecycle import Decision
from fyp_backend.users.deletion import DELETION_PLAN
from fyp_backend.users.models import User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo123"
DEMO_DOMAIN = "demo.fyp.edu"


class Command(BaseCommand):
    help = "Seed database with demo data for frontend development"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Clear existing demo data before seeding",
        )

    def handle(self, *args, **options):
        if options["clear"]:
            self.clear_demo_data()

        self.stdout.write("Creating demo data...")
        self.create_role_groups()

        manager = self.create_user("manager", "Maya", "Manager", role=Role.MANAGER)
        moderator = self.create_user("moderator", "Omar", "Moderator", role=Role.MODERATOR)
        examiner = self.create_user("examiner", "Eva", "Examiner", role=Role.EXAMINER)
        supervisors = [
            self.create_user("s.khan", "Sara", "Khan", role=Role.SUPERVISOR),
            self.create_user("d.mensah", "David", "Mensah", role=Role.SUPERVISOR),
        ]
        students = [
            self.create_user(f"student{i}", first_name, last_name, role=Role.STUDENT)
            for i, (first_name, last_name) in enumerate(
                [("Alice", "Durand"), ("Bilal", "Haddad"), ("Chen", "Wei"), ("Dana", "Ortiz")],
                start=1,
            )
        ]

        if Project.objects.filter(supervisor__in=supervisors).exists():
            self.stdout.write(self.style.WARNING("Demo projects already exist, run with --clear to reseed."))
            return

        with transaction.atomic():
            # Student proposal through both review tiers, then examined.
            proposal = proposal_services.submit(
                students[0],
                title="Retrieval-augmented chatbot for course material",
                description="A chatbot answering questions over lecture notes using RAG.",
                proposal_type="research",
                specialization="Machine Learning",
                expected_outcome="Prototype and evaluation report",
                target_supervisor_id=supervisors[0].id,
            )
            proposal_services.review_by_supervisor(supervisors[0], proposal.id, Decision.APPROVE, "Good scope.")
            proposal = proposal_services.review_by_moderator(moderator, proposal.id, Decision.APPROVE)
            project_services.assign_examiner(manager, proposal.project_id, examiner.id)
            self.stdout.write(f"  Created approved project: {proposal.title[:40]}")

            # Student proposal waiting for the supervisor.
            proposal_services.submit(
                students[1],
                title="Mobile app for campus event tracking",
                description="Cross-platform app listing events with push reminders.",
                proposal_type="application",
                specialization="Mobile",
                target_supervisor_id=supervisors[1].id,
            )
            self.stdout.write("  Created pending student proposal")

            # Supervisor project available to students.
            offered = proposal_services.submit(
                supervisors[1],
                title="IoT dashboard for smart classrooms",
                description="Web dashboard monitoring classroom sensors in real time.",
                proposal_type="both",
                specialization="Web/IoT",
            )
            proposal_services.review_by_moderator(moderator, offered.id, Decision.APPROVE)
            self.stdout.write("  Created available supervisor project")

        self.stdout.write(self.style.SUCCESS("\nDemo data created successfully!"))
        self.stdout.write("\nSummary:")
        self.stdout.write(f"  - Manager: {manager.email}")
        self.stdout.write(f"  - Moderator: {moderator.email}")
        self.stdout.write(f"  - Examiner: {examiner.email}")
        self.stdout.write(f"  - {len(supervisors)} Supervisors, {len(students)} Students")
        self.stdout.write(f"\nDefault password for all users: {DEMO_PASSWORD}")

    def create_role_groups(self):
        """Create Django auth groups for roles."""
        for role in Role:
            AuthGroup.objects.get_or_create(name=role.value)
        self.stdout.write("  Role groups created/verified")

    def create_user(self, local_part, first_name, last_name, role):
        """Create a user if not exists."""
        email = f"{local_part}@{DEMO_DOMAIN}"
        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                "first_name": first_name,
                "last_name": last_name,
                "is_active": True,
            },
        )
        if created:
            user.set_password(DEMO_PASSWORD)
            user.save()
            user.groups.add(AuthGroup.objects.get(name=role.value))
            self.stdout.write(f"  Created user: {email} ({role.value})")
        return user

    @transaction.atomic
    def clear_demo_data(self):
        """Clear existing demo data, running the same steps as a user deletion."""
        self.stdout.write("Clearing existing demo data...")
        for user in User.objects.filter(email__endswith=f"@{DEMO_DOMAIN}"):
            for _label, step in DELETION_PLAN:
                step(user)
        # Projects left without any participant
        Project.objects.filter(student__isnull=True, supervisor__isnull=True, proposal__isnull=True).delete()
        self.stdout.write(self.style.WARNING("  Demo data cleared"))

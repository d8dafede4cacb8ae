from factory import Faker
from factory import SubFactory
from factory.django import DjangoModelFactory

from fyp_backend.core.roles import Role
from fyp_backend.projects.models import ExaminerAssignment
from fyp_backend.projects.models import Project
from fyp_backend.projects.models import ProjectStatus
from fyp_backend.projects.models import ProjectType
from fyp_backend.users.tests.factories import UserFactory


class ProjectFactory(DjangoModelFactory):
    """An approved project with a student and a supervisor."""

    title = Faker("sentence", nb_words=5)
    description = Faker("paragraph")
    specialization = "Software Engineering"
    project_type = ProjectType.APPLICATION
    student = SubFactory(UserFactory, roles=[Role.STUDENT])
    supervisor = SubFactory(UserFactory, roles=[Role.SUPERVISOR])
    status = ProjectStatus.APPROVED

    class Meta:
        model = Project


class ExaminerAssignmentFactory(DjangoModelFactory):
    project = SubFactory(ProjectFactory)
    examiner = SubFactory(UserFactory, roles=[Role.EXAMINER])

    class Meta:
        model = ExaminerAssignment

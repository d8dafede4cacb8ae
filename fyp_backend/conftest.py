import pytest
from django.contrib.auth.models import Group
from django.test import Client

from fyp_backend.core.roles import Role
from fyp_backend.users.tests.factories import UserFactory


@pytest.fixture
def role_groups(db):
    """Create all role groups."""
    return {role: Group.objects.get_or_create(name=role.value)[0] for role in Role}


@pytest.fixture
def student(role_groups):
    return UserFactory(email="student@example.com", first_name="Alice", roles=[Role.STUDENT])


@pytest.fixture
def other_student(role_groups):
    return UserFactory(email="student2@example.com", first_name="Bob", roles=[Role.STUDENT])


@pytest.fixture
def supervisor(role_groups):
    return UserFactory(email="supervisor@example.com", first_name="Sara", roles=[Role.SUPERVISOR])


@pytest.fixture
def other_supervisor(role_groups):
    return UserFactory(email="supervisor2@example.com", first_name="David", roles=[Role.SUPERVISOR])


@pytest.fixture
def moderator(role_groups):
    return UserFactory(email="moderator@example.com", first_name="Omar", roles=[Role.MODERATOR])


@pytest.fixture
def examiner(role_groups):
    return UserFactory(email="examiner@example.com", first_name="Eva", roles=[Role.EXAMINER])


@pytest.fixture
def manager(role_groups):
    return UserFactory(email="manager@example.com", first_name="Maya", roles=[Role.MANAGER])


@pytest.fixture
def client_for():
    """Return a helper building a test client logged in as the given user."""

    def _client_for(user) -> Client:
        client = Client()
        client.force_login(user)
        return client

    return _client_for

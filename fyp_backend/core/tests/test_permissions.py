"""
Tests for the permission classes.
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory

from fyp_backend.core.api.permissions import AllowAny
from fyp_backend.core.api.permissions import IsAuthenticated
from fyp_backend.core.api.permissions import IsExaminer
from fyp_backend.core.api.permissions import IsManager
from fyp_backend.core.api.permissions import IsModerator
from fyp_backend.core.api.permissions import IsStudent
from fyp_backend.core.api.permissions import IsSupervisor
from fyp_backend.core.roles import Role
from fyp_backend.users.tests.factories import UserFactory


@pytest.fixture
def request_factory():
    """Return a Django RequestFactory."""
    return RequestFactory()


def make_request(request_factory, user=None):
    """Create a request with the given user."""
    request = request_factory.get("/")
    request.user = user if user else AnonymousUser()
    return request


@pytest.mark.django_db
class TestIsAuthenticated:
    """Tests for IsAuthenticated permission."""

    def test_anonymous_user_denied(self, request_factory):
        request = make_request(request_factory)
        assert IsAuthenticated().has_permission(request, None) is False

    def test_authenticated_user_allowed(self, request_factory):
        request = make_request(request_factory, UserFactory())
        assert IsAuthenticated().has_permission(request, None) is True

    def test_inactive_user_denied(self, request_factory):
        """Deactivated accounts keep no access even with a live session."""
        request = make_request(request_factory, UserFactory(is_active=False))
        assert IsAuthenticated().has_permission(request, None) is False


@pytest.mark.django_db
class TestRolePermissions:
    """Tests for the single-role permissions."""

    @pytest.mark.parametrize(
        ("permission", "role"),
        [
            (IsStudent, Role.STUDENT),
            (IsSupervisor, Role.SUPERVISOR),
            (IsModerator, Role.MODERATOR),
            (IsExaminer, Role.EXAMINER),
            (IsManager, Role.MANAGER),
        ],
    )
    def test_role_holder_allowed(self, request_factory, role_groups, permission, role):
        request = make_request(request_factory, UserFactory(roles=[role]))
        assert permission().has_permission(request, None) is True

    @pytest.mark.parametrize("permission", [IsStudent, IsSupervisor, IsModerator, IsExaminer, IsManager])
    def test_user_without_role_denied(self, request_factory, role_groups, permission):
        request = make_request(request_factory, UserFactory())
        assert permission().has_permission(request, None) is False

    @pytest.mark.parametrize("permission", [IsStudent, IsSupervisor, IsModerator, IsExaminer, IsManager])
    def test_anonymous_denied(self, request_factory, permission):
        request = make_request(request_factory)
        assert permission().has_permission(request, None) is False

    def test_superuser_is_manager(self, request_factory):
        request = make_request(request_factory, UserFactory(is_superuser=True))
        assert IsManager().has_permission(request, None) is True

    def test_roles_do_not_leak(self, request_factory, role_groups):
        """A supervisor is not a moderator."""
        request = make_request(request_factory, UserFactory(roles=[Role.SUPERVISOR]))
        assert IsModerator().has_permission(request, None) is False


class TestAllowAny:
    def test_anonymous_allowed(self, request_factory):
        request = make_request(request_factory)
        assert AllowAny().has_permission(request, None) is True

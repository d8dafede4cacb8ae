import pytest

from fyp_backend.core.exceptions import AlreadyExistsError
from fyp_backend.core.exceptions import PermissionDeniedError
from fyp_backend.core.exceptions import ValidationError
from fyp_backend.core.roles import Role
from fyp_backend.users import services
from fyp_backend.users.models import User


@pytest.mark.django_db
class TestCreateUser:
    def test_create_with_roles(self, manager):
        user = services.create_user(
            manager,
            email="New.Student@EXAMPLE.com",
            first_name="Nina",
            roles=[Role.STUDENT.value],
            password="StrongPass123!",
        )

        assert user.email == "New.Student@example.com"
        assert user.role_names == ["Student"]
        assert user.check_password("StrongPass123!")

    def test_temporary_password_when_none_given(self, manager):
        user = services.create_user(manager, email="temp@example.com", first_name="Tom", roles=["Examiner"])

        assert user.has_usable_password()

    def test_at_least_one_role(self, manager):
        with pytest.raises(ValidationError):
            services.create_user(manager, email="norole@example.com", first_name="No", roles=[])

        assert not User.objects.filter(email="norole@example.com").exists()

    def test_unknown_role(self, manager):
        with pytest.raises(ValidationError):
            services.create_user(manager, email="x@example.com", first_name="X", roles=["Dean"])

    def test_duplicate_email(self, manager, student):
        with pytest.raises(AlreadyExistsError):
            services.create_user(manager, email="STUDENT@example.com", first_name="Again", roles=["Student"])

    def test_requires_manager(self, supervisor):
        with pytest.raises(PermissionDeniedError):
            services.create_user(supervisor, email="x@example.com", first_name="X", roles=["Student"])


@pytest.mark.django_db
class TestUpdateUser:
    def test_change_roles(self, manager, supervisor):
        user = services.update_user(manager, supervisor.id, roles=["Supervisor", "Examiner"])

        assert set(user.role_names) == {"Supervisor", "Examiner"}

    def test_roles_cannot_be_emptied(self, manager, supervisor):
        with pytest.raises(ValidationError):
            services.update_user(manager, supervisor.id, roles=[])

        assert supervisor.role_names == ["Supervisor"]

    def test_deactivate(self, manager, student):
        user = services.update_user(manager, student.id, is_active=False)

        assert user.is_active is False

    def test_cannot_deactivate_self(self, manager):
        with pytest.raises(PermissionDeniedError):
            services.update_user(manager, manager.id, is_active=False)

from collections.abc import Sequence
from typing import Any

from django.contrib.auth.models import Group
from factory import Faker
from factory import Sequence as FactorySequence
from factory import post_generation
from factory.django import DjangoModelFactory

from fyp_backend.users.models import User

DEFAULT_PASSWORD = "TestPass123!"


class UserFactory(DjangoModelFactory):
    email = FactorySequence(lambda n: f"user{n}@example.com")
    first_name = Faker("first_name")
    last_name = Faker("last_name")
    is_active = True

    @post_generation
    def password(self, create: bool, extracted: Sequence[Any], **kwargs):
        password = extracted or DEFAULT_PASSWORD
        self.set_password(password)
        if create:
            self.save()

    @post_generation
    def roles(self, create: bool, extracted: Sequence[Any], **kwargs):
        """UserFactory(roles=[Role.STUDENT]) puts the user in those groups."""
        if not create or not extracted:
            return
        for role in extracted:
            group, _ = Group.objects.get_or_create(name=getattr(role, "value", role))
            self.groups.add(group)

    class Meta:
        model = User
        django_get_or_create = ["email"]
        skip_postgeneration_save = True

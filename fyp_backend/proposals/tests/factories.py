from factory import Faker
from factory import SubFactory
from factory.django import DjangoModelFactory

from fyp_backend.core.roles import Role
from fyp_backend.projects.models import ProjectType
from fyp_backend.proposals.lifecycle import ProposalStatus
from fyp_backend.proposals.models import Proposal
from fyp_backend.users.tests.factories import UserFactory


class ProposalFactory(DjangoModelFactory):
    """A pending student proposal addressed to a supervisor."""

    title = Faker("sentence", nb_words=5)
    description = Faker("paragraph")
    proposal_type = ProjectType.RESEARCH
    specialization = "Machine Learning"
    submitted_by = SubFactory(UserFactory, roles=[Role.STUDENT])
    submitted_to = SubFactory(UserFactory, roles=[Role.SUPERVISOR])
    status = ProposalStatus.PENDING

    class Meta:
        model = Proposal

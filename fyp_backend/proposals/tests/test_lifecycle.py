"""
Tests for the proposal transition table.
"""

import itertools

import pytest

from fyp_backend.core.exceptions import InvalidTransitionError
from fyp_backend.core.roles import Role
from fyp_backend.proposals.lifecycle import TRANSITIONS
from fyp_backend.proposals.lifecycle import Decision
from fyp_backend.proposals.lifecycle import ProposalStatus
from fyp_backend.proposals.lifecycle import Reviewer
from fyp_backend.proposals.lifecycle import can_transition
from fyp_backend.proposals.lifecycle import is_editable
from fyp_backend.proposals.lifecycle import resolve_target
from fyp_backend.proposals.lifecycle import rule_for


class TestTransitionTable:
    def test_every_reviewer_decision_pair_is_declared(self):
        """No decision branch is left without a target status."""
        for reviewer, decision in itertools.product(Reviewer, Decision):
            assert (reviewer, decision) in TRANSITIONS
            assert TRANSITIONS[(reviewer, decision)].target in ProposalStatus.values

    @pytest.mark.parametrize(
        ("decision", "target"),
        [
            (Decision.APPROVE, ProposalStatus.SUPERVISOR_APPROVED),
            (Decision.REJECT, ProposalStatus.SUPERVISOR_REJECTED),
            (Decision.MODIFY, ProposalStatus.MODIFICATIONS_REQUIRED),
        ],
    )
    def test_supervisor_targets(self, decision, target):
        assert resolve_target(ProposalStatus.PENDING, Role.SUPERVISOR, decision) == target

    @pytest.mark.parametrize(
        ("decision", "target"),
        [
            (Decision.APPROVE, ProposalStatus.APPROVED),
            (Decision.REJECT, ProposalStatus.REJECTED),
            (Decision.MODIFY, ProposalStatus.MODIFICATIONS_REQUIRED),
        ],
    )
    def test_moderator_targets(self, decision, target):
        assert resolve_target(ProposalStatus.SUPERVISOR_APPROVED, Role.MODERATOR, decision) == target


class TestCanTransition:
    @pytest.mark.parametrize("decision", list(Decision))
    def test_supervisor_reviews_only_pending(self, decision):
        for status in ProposalStatus.values:
            expected = status == ProposalStatus.PENDING
            assert can_transition(status, Role.SUPERVISOR, decision) is expected

    @pytest.mark.parametrize("decision", list(Decision))
    def test_moderator_reviews_only_supervisor_approved(self, decision):
        for status in ProposalStatus.values:
            expected = status == ProposalStatus.SUPERVISOR_APPROVED
            assert can_transition(status, Role.MODERATOR, decision) is expected

    def test_moderator_on_pending_student_proposal(self):
        """A student proposal must be supervisor-approved first."""
        assert not can_transition(ProposalStatus.PENDING, Role.MODERATOR, Decision.APPROVE)

    def test_moderator_on_pending_supervisor_proposal(self):
        assert can_transition(
            ProposalStatus.PENDING, Role.MODERATOR, Decision.APPROVE, supervisor_authored=True
        )
        assert not can_transition(
            ProposalStatus.SUPERVISOR_APPROVED, Role.MODERATOR, Decision.APPROVE, supervisor_authored=True
        )

    def test_supervisor_tier_skipped_for_supervisor_proposals(self):
        assert rule_for(Role.SUPERVISOR, Decision.APPROVE, supervisor_authored=True) is None

    @pytest.mark.parametrize("role", [Role.STUDENT, Role.EXAMINER, Role.MANAGER, "nobody"])
    def test_other_roles_never_review(self, role):
        for status, decision in itertools.product(ProposalStatus.values, Decision):
            assert not can_transition(status, role, decision)

    def test_unknown_decision(self):
        assert rule_for(Role.SUPERVISOR, "maybe") is None
        assert not can_transition(ProposalStatus.PENDING, Role.SUPERVISOR, "maybe")

    def test_accepts_plain_strings(self):
        assert can_transition("pending", "Supervisor", "approve")
        assert can_transition("supervisor_approved", "moderator", "reject")


class TestResolveTarget:
    def test_illegal_transition_raises(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            resolve_target(ProposalStatus.APPROVED, Role.MODERATOR, Decision.REJECT)

        assert exc_info.value.details == {"status": "approved", "decision": "reject"}

    def test_terminal_statuses_accept_no_review(self):
        for status in (ProposalStatus.APPROVED, ProposalStatus.REJECTED):
            for reviewer, decision in itertools.product(Reviewer, Decision):
                assert not can_transition(status, reviewer, decision)


class TestIsEditable:
    @pytest.mark.parametrize(
        ("status", "editable"),
        [
            (ProposalStatus.PENDING, True),
            (ProposalStatus.MODIFICATIONS_REQUIRED, True),
            (ProposalStatus.SUPERVISOR_REJECTED, True),
            (ProposalStatus.SUPERVISOR_APPROVED, False),
            (ProposalStatus.APPROVED, False),
            (ProposalStatus.REJECTED, False),
        ],
    )
    def test_editable_statuses(self, status, editable):
        assert is_editable(status) is editable

"""
Proposal API controllers.
"""

from fyp_backend.proposals.api.proposals import ProposalController

__all__ = ["ProposalController"]

"""
Vote pathway: request validation and coordination.
"""

from votearena.voting.validator import validate_vote_request
from votearena.voting.coordinator import VoteCoordinator, is_rate_limit_message

__all__ = [
    "validate_vote_request",
    "VoteCoordinator",
    "is_rate_limit_message",
]

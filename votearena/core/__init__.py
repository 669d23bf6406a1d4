"""
Core data types for VoteArena.
"""

from votearena.core.contestant import Contestant, Matchup
from votearena.core.network import RequestContext, resolve_remote_ip
from votearena.core.vote import VoteChoice, VoteRequest, VoteResult, VoteStatus
from votearena.core.errors import (
    VoteArenaError,
    ValidationError,
    MissingContestants,
    IdenticalContestants,
    InvalidOutcome,
    InsufficientPool,
    SigningUnavailable,
    RatingEngineError,
    StoreError,
)

__all__ = [
    "Contestant",
    "Matchup",
    "RequestContext",
    "resolve_remote_ip",
    "VoteChoice",
    "VoteRequest",
    "VoteResult",
    "VoteStatus",
    "VoteArenaError",
    "ValidationError",
    "MissingContestants",
    "IdenticalContestants",
    "InvalidOutcome",
    "InsufficientPool",
    "SigningUnavailable",
    "RatingEngineError",
    "StoreError",
]

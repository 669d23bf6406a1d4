"""
VoteArena - head-to-head voting for ranked entities.

Pairs contestants with similar ratings, records votes through an external
rating engine, and keeps automated voters out with a CAPTCHA plus
short-lived signed session tokens.
"""

__version__ = "1.0.0"

from votearena.core import (
    Contestant,
    Matchup,
    RequestContext,
    VoteChoice,
    VoteRequest,
    VoteResult,
    VoteStatus,
)
from votearena.matchmaking import Matchmaker, RandomnessSource
from votearena.security import AbuseGate, HCaptchaVerifier, SessionTokenCodec
from votearena.voting import VoteCoordinator, validate_vote_request

__all__ = [
    "__version__",
    "Contestant",
    "Matchup",
    "RequestContext",
    "VoteChoice",
    "VoteRequest",
    "VoteResult",
    "VoteStatus",
    "Matchmaker",
    "RandomnessSource",
    "AbuseGate",
    "HCaptchaVerifier",
    "SessionTokenCodec",
    "VoteCoordinator",
    "validate_vote_request",
]

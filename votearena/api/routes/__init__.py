"""
API Routes for VoteArena.

- vote: abuse-gated vote recording
- matchup: matchup selection and vote totals
"""

from votearena.api.routes.vote import router as vote_router
from votearena.api.routes.matchup import router as matchup_router

__all__ = [
    "vote_router",
    "matchup_router",
]

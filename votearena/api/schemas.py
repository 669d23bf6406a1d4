"""
Pydantic schemas for API responses.

The vote request body is validated by votearena.voting.validator so that
validation failures keep their documented 400 messages.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# =============================================================================
# Vote Schemas
# =============================================================================

class RatingRow(BaseModel):
    """Updated rating snapshot for one contestant."""
    company_id: str
    rating: float
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    rank: Optional[int] = None


class VoteResponse(BaseModel):
    """Successful vote."""
    data: List[RatingRow]
    sessionToken: Optional[str] = Field(None, description="Token to present on the next vote")


class VoteErrorResponse(BaseModel):
    """Failed vote."""
    error: str
    errorCode: Optional[str] = Field(
        None,
        description="captcha_required, captcha_failed, rate_limited or vote_failed",
    )


# =============================================================================
# Matchup Schemas
# =============================================================================

class ContestantSchema(BaseModel):
    """A contestant as shown in a matchup."""
    id: str
    name: str
    logoUrl: Optional[str] = None
    tags: List[str] = []
    elo: int
    rank: int


class MatchupResponse(BaseModel):
    """A pairing plus the aggregate vote count."""
    companies: List[ContestantSchema]
    totalVotes: int


class VoteTotalResponse(BaseModel):
    totalVotes: int


# =============================================================================
# Common Schemas
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    store_configured: bool
    captcha_configured: bool
    session_tokens_enabled: bool
    timestamp: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: str

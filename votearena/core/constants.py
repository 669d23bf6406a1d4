"""
System constants for VoteArena.

Head-to-head matchmaking and abuse-gated voting.
"""

from typing import Tuple

# =============================================================================
# Matchmaking
# =============================================================================

# Maximum rating difference between paired contestants before falling back
# to an unconstrained pairing
FAIRNESS_WINDOW: int = 300

# Minimum pool size for a matchup
MIN_POOL_SIZE: int = 2

# =============================================================================
# Session Tokens
# =============================================================================

# Lifetime of a session token (seconds)
SESSION_TTL_SECONDS: int = 3600

# Separator between the payload and signature segments
SESSION_TOKEN_DELIMITER: str = "."

# Network identity used when the caller's address is unknown
UNKNOWN_NETWORK_ID: str = "0.0.0.0"

# =============================================================================
# Rating Engine
# =============================================================================

# Failure phrases (lower-case) that mark a rejected vote as rate limited
RATE_LIMIT_PHRASES: Tuple[str, ...] = (
    "too many votes",
    "vote limit",
    "draw limit",
)

DEFAULT_VOTE_FAILURE_MESSAGE: str = "Failed to record vote."

# =============================================================================
# External Services
# =============================================================================

HCAPTCHA_VERIFY_URL: str = "https://hcaptcha.com/siteverify"

RATING_ENGINE_FUNCTION: str = "record_startup_matchup"
LEADERBOARD_VIEW: str = "startup_leaderboard"
MATCHUPS_TABLE: str = "startup_matchups"
TOTAL_VOTE_TABLES: Tuple[str, ...] = ("matchups", "startup_matchups")

HTTP_TIMEOUT: float = 10.0

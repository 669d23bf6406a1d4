"""
Shared fixtures and configuration for VoteArena tests.
"""

import os
import pytest
from unittest.mock import AsyncMock, patch

from votearena.core.contestant import Contestant
from votearena.security.captcha import CaptchaResult


# Every environment variable Settings reads
SETTINGS_ENV_KEYS = [
    "EDGE_SUPABASE_URL",
    "SUPABASE_URL",
    "EDGE_SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_JWT_SECRET",
    "HCAPTCHA_SECRET_KEY",
    "HCAPTCHA_VERIFY_URL",
    "VOTE_SESSION_SECRET",
    "VOTE_SESSION_TTL",
    "ALLOWED_VOTE_ORIGINS",
    "MATCHUP_FAIRNESS_WINDOW",
    "RATING_ENGINE_FUNCTION",
    "LEADERBOARD_VIEW",
    "MATCHUPS_TABLE",
    "TOTAL_VOTE_TABLES",
    "HTTP_TIMEOUT",
    "LOG_LEVEL",
]

SESSION_SECRET = "test-session-secret"


# =============================================================================
# Environment
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env():
    """
    Isolate tests from the developer's environment.

    Removes every variable Settings reads so that explicitly passed
    values are not overridden.
    """
    with patch.dict(os.environ, {}, clear=False):
        for key in SETTINGS_ENV_KEYS:
            os.environ.pop(key, None)
        yield

    from votearena.config.settings import reset_settings
    reset_settings()


# =============================================================================
# Clock Fixtures
# =============================================================================

class FakeClock:
    """Manually advanced unix clock."""

    def __init__(self, now: float = 1_700_000_000):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


# =============================================================================
# Contestant Fixtures
# =============================================================================

def make_contestant(contestant_id: str, rating: int = 1500, **kwargs) -> Contestant:
    return Contestant(
        contestant_id=contestant_id,
        name=kwargs.pop("name", f"Startup {contestant_id}"),
        rating=rating,
        **kwargs,
    )


@pytest.fixture
def contestant_pool():
    """A pool with one tight cluster and one outlier."""
    return [
        make_contestant("acme", 1500, rank=2),
        make_contestant("globex", 1620, rank=1),
        make_contestant("initech", 1450, rank=3),
        make_contestant("umbrella", 2900, rank=4),
    ]


# =============================================================================
# Anti-abuse Fixtures
# =============================================================================

@pytest.fixture
def codec(clock):
    """Session token codec with a fixed clock."""
    from votearena.security.session_token import SessionTokenCodec
    return SessionTokenCodec(SESSION_SECRET, ttl_seconds=3600, clock=clock)


@pytest.fixture
def captcha():
    """CAPTCHA verifier that accepts every token."""
    verifier = AsyncMock()
    verifier.verify.return_value = CaptchaResult(ok=True)
    return verifier


@pytest.fixture
def gate(codec, captcha):
    from votearena.security.abuse_gate import AbuseGate
    return AbuseGate(codec, captcha)


# =============================================================================
# Rating Engine Fixtures
# =============================================================================

@pytest.fixture
def rating_rows():
    """Rows returned by the rating engine after a vote."""
    return [
        {
            "company_id": "acme",
            "rating": 1516.0,
            "matches_played": 11,
            "wins": 7,
            "losses": 3,
            "draws": 1,
            "rank": 2,
        },
        {
            "company_id": "globex",
            "rating": 1604.0,
            "matches_played": 9,
            "wins": 5,
            "losses": 4,
            "draws": 0,
            "rank": 1,
        },
    ]


@pytest.fixture
def engine(rating_rows):
    """Rating engine that records every vote."""
    mock_engine = AsyncMock()
    mock_engine.record_matchup.return_value = rating_rows
    return mock_engine


@pytest.fixture
def coordinator(gate, engine):
    from votearena.voting.coordinator import VoteCoordinator
    return VoteCoordinator(gate, engine)


@pytest.fixture
def vote_body():
    """A valid vote body without any tokens."""
    return {"companyA": "acme", "companyB": "globex", "result": "a"}


@pytest.fixture
def contestant_factory():
    return make_contestant

"""
Global configuration settings for VoteArena.

Loads configuration from environment variables and provides
typed access to all system settings.
"""

import os
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from dotenv import load_dotenv

from votearena.core.constants import (
    FAIRNESS_WINDOW,
    HCAPTCHA_VERIFY_URL,
    HTTP_TIMEOUT,
    LEADERBOARD_VIEW,
    MATCHUPS_TABLE,
    RATING_ENGINE_FUNCTION,
    SESSION_TTL_SECONDS,
    TOTAL_VOTE_TABLES,
)

load_dotenv()


def resolve_env(*keys: str) -> Optional[str]:
    """Return the first non-blank environment value among keys, trimmed."""
    for key in keys:
        value = os.getenv(key)
        if value is not None and value.strip():
            return value.strip()
    return None


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


@dataclass
class Settings:
    """Global settings for VoteArena."""

    # Rating store (Supabase)
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Gateway JWT check
    supabase_jwt_secret: str = ""

    # CAPTCHA provider
    hcaptcha_secret: str = ""
    hcaptcha_verify_url: str = HCAPTCHA_VERIFY_URL

    # Session tokens
    session_secret: str = ""
    session_ttl_seconds: int = SESSION_TTL_SECONDS

    # CORS
    allowed_origins: List[str] = field(default_factory=list)

    # Matchmaking
    fairness_window: int = FAIRNESS_WINDOW

    # Store objects
    rating_function: str = RATING_ENGINE_FUNCTION
    leaderboard_view: str = LEADERBOARD_VIEW
    matchups_table: str = MATCHUPS_TABLE
    total_vote_tables: List[str] = field(default_factory=lambda: list(TOTAL_VOTE_TABLES))

    http_timeout: float = HTTP_TIMEOUT

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        """Load settings from environment variables."""
        self.supabase_url = resolve_env("EDGE_SUPABASE_URL", "SUPABASE_URL") or self.supabase_url
        self.supabase_service_role_key = (
            resolve_env("EDGE_SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_SERVICE_ROLE_KEY")
            or self.supabase_service_role_key
        )
        self.supabase_jwt_secret = resolve_env("SUPABASE_JWT_SECRET") or self.supabase_jwt_secret

        self.hcaptcha_secret = resolve_env("HCAPTCHA_SECRET_KEY") or self.hcaptcha_secret
        self.hcaptcha_verify_url = resolve_env("HCAPTCHA_VERIFY_URL") or self.hcaptcha_verify_url

        self.session_secret = resolve_env("VOTE_SESSION_SECRET") or self.session_secret
        if resolve_env("VOTE_SESSION_TTL"):
            self.session_ttl_seconds = _positive_int(resolve_env("VOTE_SESSION_TTL"), SESSION_TTL_SECONDS)

        if resolve_env("ALLOWED_VOTE_ORIGINS"):
            self.allowed_origins = _split_list(resolve_env("ALLOWED_VOTE_ORIGINS"))

        if resolve_env("MATCHUP_FAIRNESS_WINDOW"):
            self.fairness_window = int(resolve_env("MATCHUP_FAIRNESS_WINDOW"))

        self.rating_function = resolve_env("RATING_ENGINE_FUNCTION") or self.rating_function
        self.leaderboard_view = resolve_env("LEADERBOARD_VIEW") or self.leaderboard_view
        self.matchups_table = resolve_env("MATCHUPS_TABLE") or self.matchups_table
        if resolve_env("TOTAL_VOTE_TABLES"):
            self.total_vote_tables = _split_list(resolve_env("TOTAL_VOTE_TABLES"))

        if resolve_env("HTTP_TIMEOUT"):
            self.http_timeout = float(resolve_env("HTTP_TIMEOUT"))

        self.log_level = resolve_env("LOG_LEVEL") or self.log_level

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    def missing_configuration(self) -> List[str]:
        """Behaviour-changing settings that are not configured."""
        missing = []
        if not self.supabase_url:
            missing.append("Missing SUPABASE_URL environment variable")
        if not self.supabase_service_role_key:
            missing.append("Missing SUPABASE_SERVICE_ROLE_KEY environment variable")
        if not self.hcaptcha_secret:
            missing.append("Missing HCAPTCHA_SECRET_KEY environment variable")
        if not self.session_secret:
            missing.append(
                "Missing VOTE_SESSION_SECRET environment variable. "
                "Captcha will be required for every vote."
            )
        return missing

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (secrets masked)."""
        return {
            "supabase_url": self.supabase_url,
            "supabase_configured": self.store_configured,
            "gateway_jwt_configured": bool(self.supabase_jwt_secret),
            "hcaptcha_configured": bool(self.hcaptcha_secret),
            "hcaptcha_verify_url": self.hcaptcha_verify_url,
            "session_tokens_enabled": bool(self.session_secret),
            "session_ttl_seconds": self.session_ttl_seconds,
            "allowed_origins": list(self.allowed_origins),
            "fairness_window": self.fairness_window,
            "rating_function": self.rating_function,
            "leaderboard_view": self.leaderboard_view,
            "matchups_table": self.matchups_table,
            "total_vote_tables": list(self.total_vote_tables),
            "log_level": self.log_level,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**kwargs) -> Settings:
    """
    Configure global settings.

    Args:
        **kwargs: Settings fields to override

    Returns:
        Configured Settings instance
    """
    settings = get_settings()

    for key, value in kwargs.items():
        if hasattr(settings, key):
            setattr(settings, key, value)

    return settings


def reset_settings():
    """Drop the global settings instance so the next get re-reads the environment."""
    global _settings
    _settings = None

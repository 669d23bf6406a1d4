"""
Dependency injection for VoteArena API.

Builds the service graph once per application from Settings and exposes
its parts to routes.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from votearena.config.settings import Settings
from votearena.database import ContestantPoolStore, SupabaseClient, SupabaseRatingEngine
from votearena.matchmaking import Matchmaker
from votearena.security import AbuseGate, HCaptchaVerifier, SessionTokenCodec
from votearena.voting import VoteCoordinator

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Long-lived collaborators shared by all requests."""
    settings: Settings
    coordinator: VoteCoordinator
    matchmaker: Matchmaker
    pool_store: Optional[ContestantPoolStore] = None
    supabase: Optional[SupabaseClient] = None
    captcha: Optional[HCaptchaVerifier] = None

    async def aclose(self):
        """Close HTTP clients."""
        if self.supabase is not None:
            await self.supabase.aclose()
        if self.captcha is not None:
            await self.captcha.aclose()


def build_services(settings: Settings) -> Services:
    """
    Wire the service graph from settings.

    Missing store credentials leave the rating engine and pool store unset;
    the vote and matchup endpoints then report a misconfiguration.
    """
    supabase = None
    engine = None
    pool_store = None

    if settings.store_configured:
        supabase = SupabaseClient(
            settings.supabase_url,
            settings.supabase_service_role_key,
            timeout=settings.http_timeout,
        )
        engine = SupabaseRatingEngine(supabase, function=settings.rating_function)
        pool_store = ContestantPoolStore(
            supabase,
            leaderboard=settings.leaderboard_view,
            matchups_table=settings.matchups_table,
        )
    else:
        logger.debug("Store credentials missing, vote and matchup endpoints disabled")

    codec = SessionTokenCodec(
        secret=settings.session_secret or None,
        ttl_seconds=settings.session_ttl_seconds,
    )
    captcha = HCaptchaVerifier(
        secret=settings.hcaptcha_secret or None,
        verify_url=settings.hcaptcha_verify_url,
        timeout=settings.http_timeout,
    )

    return Services(
        settings=settings,
        coordinator=VoteCoordinator(AbuseGate(codec, captcha), engine),
        matchmaker=Matchmaker(window=settings.fairness_window),
        pool_store=pool_store,
        supabase=supabase,
        captcha=captcha,
    )


# =============================================================================
# Route Dependencies
# =============================================================================

def get_services(request: Request) -> Services:
    return request.app.state.services


def get_vote_coordinator(request: Request) -> VoteCoordinator:
    return get_services(request).coordinator


def get_matchmaker(request: Request) -> Matchmaker:
    return get_services(request).matchmaker


def get_pool_store(request: Request) -> Optional[ContestantPoolStore]:
    return get_services(request).pool_store


def get_app_settings(request: Request) -> Settings:
    return get_services(request).settings

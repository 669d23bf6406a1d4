"""
Matchup read path.

Serves a fresh pairing for the voting page together with the aggregate
vote count. Not abuse-gated: it never writes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from votearena.api.dependencies import get_app_settings, get_matchmaker, get_pool_store
from votearena.api.responses import error_response
from votearena.api.schemas import ErrorResponse, MatchupResponse, VoteTotalResponse
from votearena.config.settings import Settings
from votearena.core.errors import InsufficientPool, StoreError
from votearena.database import ContestantPoolStore
from votearena.matchmaking import Matchmaker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["matchup"])

STORE_MISSING = "Server misconfiguration: missing Supabase credentials."


@router.get(
    "/matchup",
    response_model=MatchupResponse,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Get a matchup",
    description="Pick two contestants within the fairness window.",
)
async def get_matchup(
    matchmaker: Matchmaker = Depends(get_matchmaker),
    pool_store: Optional[ContestantPoolStore] = Depends(get_pool_store),
):
    if pool_store is None:
        logger.error("Matchup requested without store credentials")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, STORE_MISSING)

    try:
        pool = await pool_store.fetch_pool()
        matchup = matchmaker.select_matchup(pool)
        total_votes = await pool_store.count_votes()
    except InsufficientPool:
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Need at least two startups for head-to-head voting.",
        )
    except StoreError as e:
        logger.error(f"Failed to load matchup: {e.message}")
        return error_response(status.HTTP_502_BAD_GATEWAY, e.message)

    return MatchupResponse(companies=matchup.to_list(), totalVotes=total_votes)


@router.get(
    "/votes/total",
    response_model=VoteTotalResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Total votes",
    description="Votes recorded across all matchup tables.",
)
async def get_total_votes(
    settings: Settings = Depends(get_app_settings),
    pool_store: Optional[ContestantPoolStore] = Depends(get_pool_store),
):
    if pool_store is None:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, STORE_MISSING)

    total = await pool_store.total_votes(settings.total_vote_tables)
    return VoteTotalResponse(totalVotes=total)

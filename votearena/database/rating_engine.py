"""
Adapter for the external rating engine.

The engine is a stored procedure that atomically updates both contestants'
ratings, records history and enforces per-voter limits. This module only
calls it; how ratings move is owned entirely by the procedure.
"""

import logging
from typing import Any, Dict, List, Optional

from votearena.core.constants import DEFAULT_VOTE_FAILURE_MESSAGE, RATING_ENGINE_FUNCTION
from votearena.core.errors import RatingEngineError
from votearena.core.vote import VoteChoice
from votearena.database.supabase import SupabaseClient, SupabaseError

logger = logging.getLogger(__name__)


class SupabaseRatingEngine:
    """Records matchups through a Supabase RPC."""

    def __init__(self, client: SupabaseClient, function: str = RATING_ENGINE_FUNCTION):
        self.client = client
        self.function = function

    async def record_matchup(
        self,
        contestant_a: str,
        contestant_b: str,
        choice: VoteChoice,
        submitter_id: Optional[str],
        voter_ip: str,
    ) -> List[Dict[str, Any]]:
        """
        Record one matchup outcome.

        Returns:
            Updated rows: company_id, rating, matches_played, wins, losses,
            draws, rank

        Raises:
            RatingEngineError: If the procedure rejects the vote or cannot be reached
        """
        params = {
            "company_a": contestant_a,
            "company_b": contestant_b,
            "result": VoteChoice(choice).value,
            "submitted_by": submitter_id,
            "voter_ip": voter_ip,
        }

        try:
            data = await self.client.rpc(self.function, params)
        except SupabaseError as e:
            logger.error(f"{self.function} error: {e.message} (status={e.status_code}, code={e.code})")
            raise RatingEngineError(e.message, status_code=e.status_code) from e

        if data is None:
            return []
        if isinstance(data, dict):
            return [data]
        if isinstance(data, list):
            return data

        logger.error(f"{self.function} returned unexpected {type(data).__name__} result")
        raise RatingEngineError(DEFAULT_VOTE_FAILURE_MESSAGE)

"""
Read-only access to the ranked pool and vote counts.
"""

import logging
from typing import Iterable, List

from votearena.core.constants import LEADERBOARD_VIEW, MATCHUPS_TABLE
from votearena.core.contestant import Contestant
from votearena.core.errors import StoreError
from votearena.database.supabase import SupabaseClient, SupabaseError

logger = logging.getLogger(__name__)

POOL_COLUMNS = "id, name, logo_url, tags, rating, rank"


class ContestantPoolStore:
    """Snapshots of the leaderboard used by the matchmaker."""

    def __init__(
        self,
        client: SupabaseClient,
        leaderboard: str = LEADERBOARD_VIEW,
        matchups_table: str = MATCHUPS_TABLE,
    ):
        self.client = client
        self.leaderboard = leaderboard
        self.matchups_table = matchups_table

    async def fetch_pool(self) -> List[Contestant]:
        """
        Fetch every contestant on the leaderboard.

        Raises:
            StoreError: If the leaderboard cannot be read
        """
        try:
            rows = await self.client.select(self.leaderboard, POOL_COLUMNS)
        except SupabaseError as e:
            raise StoreError(e.message, status_code=e.status_code) from e
        return [Contestant.from_row(row) for row in rows if row.get("id") is not None]

    async def count_votes(self) -> int:
        """
        Count recorded matchups.

        Raises:
            StoreError: If the count fails
        """
        try:
            return await self.client.count(self.matchups_table)
        except SupabaseError as e:
            raise StoreError(e.message, status_code=e.status_code) from e

    async def total_votes(self, tables: Iterable[str]) -> int:
        """
        Sum the vote counts of several matchup tables.

        A table that cannot be counted is logged and contributes 0.
        """
        total = 0
        for table in tables:
            try:
                total += await self.client.count(table)
            except SupabaseError as e:
                logger.error(f"Error fetching vote count for {table}: {e.message}")
        return total

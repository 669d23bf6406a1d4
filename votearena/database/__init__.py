"""
Database module for VoteArena.

Adapters for the Supabase-hosted ranked-entity store: the rating engine
procedure (write path) and leaderboard snapshots (read path).
"""

from votearena.database.supabase import SupabaseClient, SupabaseError
from votearena.database.rating_engine import SupabaseRatingEngine
from votearena.database.pool import ContestantPoolStore

__all__ = [
    "SupabaseClient",
    "SupabaseError",
    "SupabaseRatingEngine",
    "ContestantPoolStore",
]

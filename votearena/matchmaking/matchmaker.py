"""
Head-to-head matchmaking.

Pairs two contestants whose ratings lie within a fairness window, falling
back to an unconstrained pairing when the window excludes everyone.
"""

import logging
from typing import Dict, Iterable, List

from votearena.core.constants import FAIRNESS_WINDOW, MIN_POOL_SIZE
from votearena.core.contestant import Contestant, Matchup
from votearena.core.errors import InsufficientPool
from votearena.matchmaking.randomness import RandomnessSource

logger = logging.getLogger(__name__)


class Matchmaker:
    """
    Selects a fair pairing from a ranked pool.

    Algorithm:
    1. Shuffle the pool uniformly
    2. Walk the shuffled pool; for each candidate collect every other member
       whose rating is within the window
    3. Pair the first candidate that has any such opponent with one of them,
       chosen uniformly
    4. If nobody has an in-window opponent, pair the first two shuffled entries

    Read-only with respect to the pool; safe to share between callers.
    """

    def __init__(self, randomness: RandomnessSource = None, window: int = None):
        """
        Initialize matchmaker.

        Args:
            randomness: Random source (a fresh unseeded one by default)
            window: Maximum rating difference for a fair pairing
        """
        self.randomness = randomness or RandomnessSource()
        self.window = window if window is not None else FAIRNESS_WINDOW

    def select_matchup(self, pool: Iterable[Contestant]) -> Matchup:
        """
        Select two distinct contestants from the pool.

        Args:
            pool: Snapshot of the ranked pool

        Returns:
            Matchup of two contestants with different identifiers

        Raises:
            InsufficientPool: If fewer than two distinct contestants exist
        """
        contestants = _unique_by_id(pool)
        if len(contestants) < MIN_POOL_SIZE:
            raise InsufficientPool(
                f"Need at least {MIN_POOL_SIZE} contestants, got {len(contestants)}"
            )

        shuffled = self.randomness.shuffled(contestants)

        for candidate in shuffled:
            opponents = self.eligible_opponents(candidate, shuffled)
            if not opponents:
                continue
            opponent = self.randomness.choice(opponents)
            return Matchup(candidate, opponent)

        logger.debug(
            "No pairing within %d rating points among %d contestants, using fallback",
            self.window, len(shuffled),
        )
        return Matchup(shuffled[0], shuffled[1])

    def eligible_opponents(
        self,
        candidate: Contestant,
        pool: List[Contestant],
    ) -> List[Contestant]:
        """All other pool members within the fairness window of candidate."""
        return [
            other for other in pool
            if other.contestant_id != candidate.contestant_id
            and abs(other.rating - candidate.rating) <= self.window
        ]


def _unique_by_id(pool: Iterable[Contestant]) -> List[Contestant]:
    """Drop repeated identifiers, keeping the first occurrence."""
    seen: Dict[str, Contestant] = {}
    for contestant in pool:
        seen.setdefault(contestant.contestant_id, contestant)
    return list(seen.values())

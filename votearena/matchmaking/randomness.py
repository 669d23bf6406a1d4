"""
Uniform randomness for matchmaking.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomnessSource:
    """
    Uniform random generator used for shuffling and tie-breaking.

    Wraps a private random.Random so that callers can seed it without
    touching the global generator.
    """

    def __init__(self, seed: Optional[int] = None, rng: random.Random = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """
        Return a uniformly random permutation of items (Fisher-Yates).

        The input sequence is not modified.
        """
        pool = list(items)
        for i in range(len(pool) - 1, 0, -1):
            j = self._rng.randrange(i + 1)
            pool[i], pool[j] = pool[j], pool[i]
        return pool

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly at random."""
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self._rng.randrange(len(items))]

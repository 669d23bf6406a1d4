"""
Matchmaking for head-to-head votes.
"""

from votearena.matchmaking.randomness import RandomnessSource
from votearena.matchmaking.matchmaker import Matchmaker

__all__ = [
    "RandomnessSource",
    "Matchmaker",
]

"""
Contestant and Matchup data classes.

Contestants are read-only snapshots of the ranked pool. Ratings and ranks
are owned by the external rating engine and never written here.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Contestant:
    """
    An entry in the ranked pool.

    Attributes:
        contestant_id: Opaque unique identifier
        name: Display name
        rating: Current rating (rounded to an integer)
        rank: Leaderboard position (1 = best, 0 = unranked)
        tags: Upper-cased tag set
        logo_url: Logo reference, if any
    """
    contestant_id: str
    name: str
    rating: int = 0
    rank: int = 0
    tags: List[str] = field(default_factory=list)
    logo_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Contestant":
        """Create a Contestant from a leaderboard row."""
        tags = row.get("tags")
        return cls(
            contestant_id=str(row["id"]),
            name=row.get("name") or "",
            rating=int(round(float(row.get("rating") or 0))),
            rank=int(row.get("rank") or 0),
            tags=[str(tag).upper() for tag in tags] if isinstance(tags, list) else [],
            logo_url=row.get("logo_url"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the public JSON shape."""
        return {
            "id": self.contestant_id,
            "name": self.name,
            "logoUrl": self.logo_url,
            "tags": list(self.tags),
            "elo": self.rating,
            "rank": self.rank,
        }


@dataclass(frozen=True)
class Matchup:
    """A pairing of two distinct contestants for one voting round."""
    first: Contestant
    second: Contestant

    def __post_init__(self):
        if self.first.contestant_id == self.second.contestant_id:
            raise ValueError(
                f"Matchup requires distinct contestants, got {self.first.contestant_id!r} twice"
            )

    @property
    def contestant_ids(self) -> tuple:
        return (self.first.contestant_id, self.second.contestant_id)

    def to_list(self) -> List[Dict[str, Any]]:
        return [self.first.to_dict(), self.second.to_dict()]

"""
Vote request and result types.

VoteResult is a tagged result: the status says which branch of the vote
pathway produced it, and the remaining fields are filled accordingly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class VoteChoice(str, Enum):
    """Outcome of a head-to-head vote."""
    FIRST = "a"
    SECOND = "b"
    DRAW = "draw"


class VoteStatus(str, Enum):
    """Branch of the vote pathway that produced a result."""
    RECORDED = "recorded"
    INVALID = "invalid_request"
    CAPTCHA_REQUIRED = "captcha_required"
    CAPTCHA_FAILED = "captcha_failed"
    RATE_LIMITED = "rate_limited"
    VOTE_FAILED = "vote_failed"
    MISCONFIGURED = "server_misconfigured"


# Statuses that carry an errorCode on the wire
_ERROR_CODES = {
    VoteStatus.CAPTCHA_REQUIRED: "captcha_required",
    VoteStatus.CAPTCHA_FAILED: "captcha_failed",
    VoteStatus.RATE_LIMITED: "rate_limited",
    VoteStatus.VOTE_FAILED: "vote_failed",
}


@dataclass(frozen=True)
class VoteRequest:
    """
    A validated vote.

    Attributes:
        contestant_a: Identifier of the first contestant
        contestant_b: Identifier of the second contestant
        choice: Outcome of the matchup
        submitter_id: Identity of the voter, if known
        captcha_token: CAPTCHA response token, if the client solved one
        session_token: Session token from a previous vote, if any
    """
    contestant_a: str
    contestant_b: str
    choice: VoteChoice
    submitter_id: Optional[str] = None
    captcha_token: Optional[str] = None
    session_token: Optional[str] = None


@dataclass
class VoteResult:
    """Outcome of VoteCoordinator.record_vote."""
    status: VoteStatus
    rows: List[Dict[str, Any]] = field(default_factory=list)
    session_token: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == VoteStatus.RECORDED

    @property
    def error_code(self) -> Optional[str]:
        """Wire error code, if this status has one."""
        return _ERROR_CODES.get(self.status)

    @classmethod
    def recorded(cls, rows: List[Dict[str, Any]], session_token: Optional[str]) -> "VoteResult":
        return cls(status=VoteStatus.RECORDED, rows=list(rows or []), session_token=session_token)

    @classmethod
    def failure(cls, status: VoteStatus, error: str) -> "VoteResult":
        return cls(status=status, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON response body."""
        if self.ok:
            return {"data": self.rows, "sessionToken": self.session_token}

        body: Dict[str, Any] = {"error": self.error}
        if self.error_code:
            body["errorCode"] = self.error_code
        return body

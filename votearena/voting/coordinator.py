"""
Vote coordinator.

Runs one vote through the pathway:

1. Validate the raw request
2. Authorize it with the abuse gate (session token or CAPTCHA)
3. Call the external rating engine exactly once
4. Classify the engine's response

Every outcome is returned as a VoteResult. The engine is never retried:
its update is atomic per call, not idempotent across calls.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from votearena.core.constants import DEFAULT_VOTE_FAILURE_MESSAGE, RATE_LIMIT_PHRASES
from votearena.core.errors import RatingEngineError, ValidationError
from votearena.core.network import RequestContext
from votearena.core.vote import VoteChoice, VoteResult, VoteStatus
from votearena.security.abuse_gate import AbuseGate, DenialReason
from votearena.voting.validator import validate_vote_request

logger = logging.getLogger(__name__)


class RatingEngine(Protocol):
    async def record_matchup(
        self,
        contestant_a: str,
        contestant_b: str,
        choice: VoteChoice,
        submitter_id: Optional[str],
        voter_ip: str,
    ) -> List[Dict[str, Any]]:
        ...


_DENIAL_STATUS = {
    DenialReason.CAPTCHA_REQUIRED: VoteStatus.CAPTCHA_REQUIRED,
    DenialReason.CAPTCHA_FAILED: VoteStatus.CAPTCHA_FAILED,
}


def is_rate_limit_message(message: str) -> bool:
    """Whether an engine failure message describes a rate limit."""
    normalized = (message or "").lower()
    return any(phrase in normalized for phrase in RATE_LIMIT_PHRASES)


class VoteCoordinator:
    """Orchestrates validation, abuse gating and the rating engine call."""

    def __init__(self, gate: AbuseGate, engine: Optional[RatingEngine]):
        """
        Initialize coordinator.

        Args:
            gate: Abuse gate
            engine: Rating engine (None when store credentials are missing)
        """
        self.gate = gate
        self.engine = engine

    @property
    def configured(self) -> bool:
        """Whether a rating engine is wired in."""
        return self.engine is not None

    def misconfiguration(self) -> VoteResult:
        logger.error("Rating engine unavailable: missing Supabase credentials")
        return VoteResult.failure(
            VoteStatus.MISCONFIGURED,
            "Server misconfiguration: missing Supabase credentials.",
        )

    async def record_vote(self, raw: Any, context: RequestContext) -> VoteResult:
        """
        Record a vote.

        Args:
            raw: Decoded JSON request body
            context: Network identity of the caller

        Returns:
            VoteResult
        """
        if not self.configured:
            return self.misconfiguration()

        try:
            request = validate_vote_request(raw)
        except ValidationError as e:
            return VoteResult.failure(VoteStatus.INVALID, str(e))

        decision = await self.gate.authorize(request, context)
        if not decision.authorized:
            return VoteResult.failure(_DENIAL_STATUS[decision.reason], decision.detail)

        try:
            rows = await self.engine.record_matchup(
                contestant_a=request.contestant_a,
                contestant_b=request.contestant_b,
                choice=request.choice,
                submitter_id=request.submitter_id,
                voter_ip=context.network_id,
            )
        except RatingEngineError as e:
            return self._classify_failure(e.message)

        logger.info(
            f"Vote recorded: {request.contestant_a} vs {request.contestant_b} "
            f"result={request.choice.value} session={'renewed' if decision.via_session else 'new'}"
        )
        return VoteResult.recorded(rows or [], decision.next_token)

    def _classify_failure(self, message: Optional[str]) -> VoteResult:
        message = message if message and message.strip() else DEFAULT_VOTE_FAILURE_MESSAGE

        if is_rate_limit_message(message):
            logger.warning(f"Vote rate limited: {message}")
            return VoteResult.failure(VoteStatus.RATE_LIMITED, message)

        logger.error(f"Rating engine failed to record vote: {message}")
        return VoteResult.failure(VoteStatus.VOTE_FAILED, message)

"""
Abuse gate for the vote endpoint.

Decides whether a vote needs a fresh CAPTCHA challenge:

1. A valid session token from a previous vote skips the CAPTCHA and is
   renewed with a new expiry (sliding session).
2. Otherwise a CAPTCHA token is required and verified with the provider;
   on success a new session token is minted.

The fast path makes no external calls; the slow path makes exactly one.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from votearena.core.errors import SigningUnavailable
from votearena.core.network import RequestContext
from votearena.core.vote import VoteRequest
from votearena.security.captcha import CaptchaResult
from votearena.security.session_token import (
    SessionClaims,
    SessionContext,
    SessionTokenCodec,
)

logger = logging.getLogger(__name__)


class CaptchaVerifier(Protocol):
    async def verify(self, token: str, remote_ip: Optional[str] = None) -> CaptchaResult:
        ...


class DenialReason(str, Enum):
    CAPTCHA_REQUIRED = "captcha_required"
    CAPTCHA_FAILED = "captcha_failed"


@dataclass(frozen=True)
class GateDecision:
    """
    Result of AbuseGate.authorize.

    Attributes:
        authorized: Whether the vote may proceed
        next_token: Session token to hand back to the client (may be None
            even when authorized, e.g. without a signing secret)
        reason: Why the vote was denied
        detail: Human-readable denial message
        via_session: True if authorized by a session token
    """
    authorized: bool
    next_token: Optional[str] = None
    reason: Optional[DenialReason] = None
    detail: Optional[str] = None
    via_session: bool = False

    @classmethod
    def denied(cls, reason: DenialReason, detail: str) -> "GateDecision":
        return cls(authorized=False, reason=reason, detail=detail)


class AbuseGate:
    """Session-token fast path with CAPTCHA fallback."""

    def __init__(self, codec: SessionTokenCodec, captcha: CaptchaVerifier):
        self.codec = codec
        self.captcha = captcha

    async def authorize(self, request: VoteRequest, context: RequestContext) -> GateDecision:
        """
        Authorize a vote request.

        Args:
            request: Validated vote request
            context: Network identity of the caller

        Returns:
            GateDecision
        """
        session_context = SessionContext(
            network_id=context.network_id,
            submitter_id=request.submitter_id,
        )

        if request.session_token:
            claims = self.codec.verify(request.session_token, session_context)
            if claims is not None:
                return GateDecision(
                    authorized=True,
                    next_token=self._renew(claims),
                    via_session=True,
                )
            logger.debug("Session token rejected, falling back to captcha")

        if not request.captcha_token:
            return GateDecision.denied(
                DenialReason.CAPTCHA_REQUIRED,
                "Captcha verification required.",
            )

        result = await self.captcha.verify(request.captcha_token, context.remote_ip)
        if not result.ok:
            logger.warning(f"Captcha verification failed: {result.error}")
            return GateDecision.denied(
                DenialReason.CAPTCHA_FAILED,
                result.error or "Captcha verification failed.",
            )

        return GateDecision(authorized=True, next_token=self._mint(session_context))

    def _renew(self, claims: SessionClaims) -> Optional[str]:
        """Re-issue a token with the same binding and a new expiry."""
        return self._mint(SessionContext(
            network_id=claims.network_id,
            submitter_id=claims.submitter_id,
        ))

    def _mint(self, context: SessionContext) -> Optional[str]:
        try:
            return self.codec.mint_for(context)
        except SigningUnavailable:
            logger.debug("Session signing unavailable, no token issued")
            return None

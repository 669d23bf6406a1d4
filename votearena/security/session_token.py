"""
Stateless session tokens for the vote endpoint.

A token is ``<payload>.<signature>``:
- payload: base64url (unpadded) JSON ``{"exp": ..., "ip": ..., "sub": ...}``
- signature: base64url (unpadded) HMAC-SHA256 of the payload segment

Validity is entirely self-describing. Nothing is stored server-side, so a
token stays valid until it expires; there is no revocation.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from votearena.core.constants import SESSION_TOKEN_DELIMITER, SESSION_TTL_SECONDS
from votearena.core.errors import SigningUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionClaims:
    """
    Logical payload of a session token.

    Attributes:
        expires_at: Absolute expiry (unix seconds)
        network_id: Network identity the token was issued for
        submitter_id: Submitter identity the token was issued for
    """
    expires_at: int
    network_id: Optional[str] = None
    submitter_id: Optional[str] = None

    def to_payload(self) -> dict:
        return {"exp": self.expires_at, "ip": self.network_id, "sub": self.submitter_id}

    @classmethod
    def from_payload(cls, payload: dict) -> "SessionClaims":
        """
        Build claims from a decoded payload.

        Raises:
            ValueError: If the payload does not have the expected shape
        """
        if not isinstance(payload, dict):
            raise ValueError("payload is not an object")

        exp = payload.get("exp")
        # bool is an int subclass but never a valid expiry
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise ValueError("exp must be an integer")

        ip = payload.get("ip")
        sub = payload.get("sub")
        if ip is not None and not isinstance(ip, str):
            raise ValueError("ip must be a string")
        if sub is not None and not isinstance(sub, str):
            raise ValueError("sub must be a string")

        return cls(expires_at=exp, network_id=ip, submitter_id=sub)


@dataclass(frozen=True)
class SessionContext:
    """Identity of the request presenting (or receiving) a token."""
    network_id: Optional[str] = None
    submitter_id: Optional[str] = None


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


class SessionTokenCodec:
    """
    Mints and verifies signed session tokens.

    The secret is loaded once and read-only afterwards, so one codec can be
    shared by all concurrent requests.
    """

    def __init__(
        self,
        secret: Optional[str],
        ttl_seconds: int = SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize codec.

        Args:
            secret: Signing secret (None disables minting and verification)
            ttl_seconds: Lifetime of minted tokens
            clock: Returns the current unix time in seconds
        """
        self._key = secret.encode("utf-8") if secret else None
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def signing_available(self) -> bool:
        return self._key is not None

    def now(self) -> int:
        return int(self._clock())

    def _sign(self, payload_part: str) -> bytes:
        return hmac.new(self._key, payload_part.encode("ascii"), hashlib.sha256).digest()

    def mint(self, claims: SessionClaims) -> str:
        """
        Serialize and sign claims.

        Raises:
            SigningUnavailable: If no secret is configured
        """
        if not self.signing_available:
            raise SigningUnavailable("Session signing secret is not configured")

        payload = json.dumps(claims.to_payload(), separators=(",", ":"))
        payload_part = b64url_encode(payload.encode("utf-8"))
        signature_part = b64url_encode(self._sign(payload_part))
        return f"{payload_part}{SESSION_TOKEN_DELIMITER}{signature_part}"

    def mint_for(self, context: SessionContext) -> str:
        """Mint a token bound to context that expires one TTL from now."""
        claims = SessionClaims(
            expires_at=self.now() + self.ttl_seconds,
            network_id=context.network_id,
            submitter_id=context.submitter_id,
        )
        return self.mint(claims)

    def verify(self, token: str, context: SessionContext) -> Optional[SessionClaims]:
        """
        Verify a token against the identity presenting it.

        Args:
            token: Token previously returned by mint
            context: Identity of the current request

        Returns:
            The token's claims if valid, None otherwise
        """
        if not token or not self.signing_available:
            return None

        parts = token.split(SESSION_TOKEN_DELIMITER)
        if len(parts) != 2:
            return None

        payload_part, signature_part = parts
        try:
            expected = b64url_encode(self._sign(payload_part))
        except UnicodeEncodeError:
            return None

        # Compare canonical encodings so that padding bits cannot be altered
        if not hmac.compare_digest(signature_part.encode("utf-8"), expected.encode("ascii")):
            return None

        try:
            claims = SessionClaims.from_payload(json.loads(b64url_decode(payload_part)))
        except (binascii.Error, ValueError):
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            return None

        if claims.expires_at <= self.now():
            logger.debug("Session token expired")
            return None

        if not _matches(claims.network_id, context.network_id):
            logger.debug("Session token network identity mismatch")
            return None

        if not _matches(claims.submitter_id, context.submitter_id):
            logger.debug("Session token submitter mismatch")
            return None

        return claims


def _matches(bound: Optional[str], presented: Optional[str]) -> bool:
    """A value absent on either side is a wildcard."""
    if not bound or not presented:
        return True
    return bound == presented

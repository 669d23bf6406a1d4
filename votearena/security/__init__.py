"""
Anti-abuse layer: session tokens, CAPTCHA verification and the abuse gate.
"""

from votearena.security.session_token import (
    SessionClaims,
    SessionContext,
    SessionTokenCodec,
)
from votearena.security.captcha import CaptchaResult, HCaptchaVerifier
from votearena.security.abuse_gate import AbuseGate, DenialReason, GateDecision

__all__ = [
    "SessionClaims",
    "SessionContext",
    "SessionTokenCodec",
    "CaptchaResult",
    "HCaptchaVerifier",
    "AbuseGate",
    "DenialReason",
    "GateDecision",
]

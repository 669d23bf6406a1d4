"""
Tests for the abuse gate.

Tests cover:
- Session token fast path (no CAPTCHA call, sliding renewal)
- CAPTCHA fallback
- Denials
- Operation without a signing secret
"""

import json

import pytest

from votearena.core.network import RequestContext
from votearena.core.vote import VoteChoice, VoteRequest
from votearena.security.abuse_gate import AbuseGate, DenialReason
from votearena.security.captcha import CaptchaResult
from votearena.security.session_token import SessionContext, SessionTokenCodec, b64url_decode


def make_request(**kwargs) -> VoteRequest:
    return VoteRequest(
        contestant_a="acme",
        contestant_b="globex",
        choice=VoteChoice.FIRST,
        **kwargs,
    )


def token_payload(token: str) -> dict:
    return json.loads(b64url_decode(token.split(".")[0]))


@pytest.fixture
def context():
    return RequestContext(remote_ip="203.0.113.5")


class TestSessionFastPath:
    """Tests for authorization by session token."""

    @pytest.mark.asyncio
    async def test_valid_token_skips_captcha(self, gate, codec, captcha, context):
        """Test a valid token authorizes without calling the provider."""
        token = codec.mint_for(SessionContext(network_id="203.0.113.5"))

        decision = await gate.authorize(make_request(session_token=token), context)

        assert decision.authorized is True
        assert decision.via_session is True
        captcha.verify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_token_is_renewed(self, gate, codec, context, clock):
        """Test the returned token expires one TTL after this vote."""
        token = codec.mint_for(SessionContext(network_id="203.0.113.5", submitter_id="user-1"))
        clock.advance(600)

        decision = await gate.authorize(
            make_request(session_token=token, submitter_id="user-1"),
            context,
        )

        renewed = token_payload(decision.next_token)
        assert renewed["exp"] == int(clock.now) + 3600
        assert renewed["exp"] > token_payload(token)["exp"]
        assert renewed["ip"] == "203.0.113.5"
        assert renewed["sub"] == "user-1"

    @pytest.mark.asyncio
    async def test_invalid_token_falls_back_to_captcha(self, gate, captcha, context):
        """Test a bad token with a CAPTCHA token goes through the provider."""
        decision = await gate.authorize(
            make_request(session_token="garbage", captcha_token="captcha-ok"),
            context,
        )

        assert decision.authorized is True
        assert decision.via_session is False
        captcha.verify.assert_awaited_once_with("captcha-ok", "203.0.113.5")

    @pytest.mark.asyncio
    async def test_invalid_token_without_captcha_denied(self, gate, captcha, context):
        """Test a bad token alone requires a CAPTCHA."""
        decision = await gate.authorize(make_request(session_token="garbage"), context)

        assert decision.authorized is False
        assert decision.reason == DenialReason.CAPTCHA_REQUIRED
        captcha.verify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_token_from_other_network_denied(self, gate, codec):
        """Test a token replayed from another address is not honoured."""
        token = codec.mint_for(SessionContext(network_id="203.0.113.5"))

        decision = await gate.authorize(
            make_request(session_token=token),
            RequestContext(remote_ip="198.51.100.20"),
        )

        assert decision.reason == DenialReason.CAPTCHA_REQUIRED


class TestCaptchaPath:
    """Tests for authorization by CAPTCHA."""

    @pytest.mark.asyncio
    async def test_no_tokens_requires_captcha(self, gate, context):
        """Test a request with no tokens is denied."""
        decision = await gate.authorize(make_request(), context)

        assert decision.authorized is False
        assert decision.reason == DenialReason.CAPTCHA_REQUIRED
        assert decision.detail == "Captcha verification required."

    @pytest.mark.asyncio
    async def test_captcha_success_mints_bound_token(self, gate, context):
        """Test a verified CAPTCHA yields a token bound to the caller."""
        decision = await gate.authorize(
            make_request(captcha_token="captcha-ok", submitter_id="user-1"),
            context,
        )

        payload = token_payload(decision.next_token)
        assert decision.authorized is True
        assert payload["ip"] == "203.0.113.5"
        assert payload["sub"] == "user-1"

    @pytest.mark.asyncio
    async def test_captcha_failure_denied(self, gate, captcha, context):
        """Test a rejected CAPTCHA carries the provider's reason."""
        captcha.verify.return_value = CaptchaResult(
            ok=False,
            error="hCaptcha verification failed: invalid-input-response.",
        )

        decision = await gate.authorize(make_request(captcha_token="bad"), context)

        assert decision.authorized is False
        assert decision.reason == DenialReason.CAPTCHA_FAILED
        assert decision.detail == "hCaptcha verification failed: invalid-input-response."
        assert decision.next_token is None

    @pytest.mark.asyncio
    async def test_unknown_address_binds_placeholder(self, gate, captcha):
        """Test an unknown caller is bound to the placeholder identity."""
        decision = await gate.authorize(make_request(captcha_token="captcha-ok"), RequestContext())

        assert token_payload(decision.next_token)["ip"] == "0.0.0.0"
        captcha.verify.assert_awaited_once_with("captcha-ok", None)


class TestWithoutSigningSecret:
    """Tests for a gate whose codec has no secret."""

    @pytest.mark.asyncio
    async def test_captcha_only(self, captcha, context):
        """Test votes are authorized by CAPTCHA but no token is issued."""
        gate = AbuseGate(SessionTokenCodec(None), captcha)

        decision = await gate.authorize(make_request(captcha_token="captcha-ok"), context)

        assert decision.authorized is True
        assert decision.next_token is None

    @pytest.mark.asyncio
    async def test_session_token_ignored(self, codec, captcha, context):
        """Test an otherwise valid token cannot skip the CAPTCHA."""
        token = codec.mint_for(SessionContext(network_id="203.0.113.5"))
        gate = AbuseGate(SessionTokenCodec(None), captcha)

        decision = await gate.authorize(make_request(session_token=token), context)

        assert decision.reason == DenialReason.CAPTCHA_REQUIRED

"""
Tests for hCaptcha verification.

The provider is replaced by an httpx.MockTransport.
"""

from urllib.parse import parse_qs

import httpx
import pytest

from votearena.security.captcha import HCaptchaVerifier

VERIFY_URL = "https://hcaptcha.test/siteverify"


def make_verifier(handler, secret="hcaptcha-secret"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HCaptchaVerifier(secret, verify_url=VERIFY_URL, client=client), client


class TestHCaptchaVerifier:
    """Tests for HCaptchaVerifier.verify."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Test an accepted token and the submitted form."""
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"success": True})

        verifier, _ = make_verifier(handler)
        result = await verifier.verify("token-1", "203.0.113.5")

        assert result.ok is True
        assert seen["url"] == VERIFY_URL
        assert seen["form"] == {
            "secret": ["hcaptcha-secret"],
            "response": ["token-1"],
            "remoteip": ["203.0.113.5"],
        }

    @pytest.mark.asyncio
    async def test_remote_ip_omitted_when_unknown(self):
        """Test remoteip is only sent when known."""
        seen = {}

        def handler(request):
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"success": True})

        verifier, _ = make_verifier(handler)
        await verifier.verify("token-1")

        assert "remoteip" not in seen["form"]

    @pytest.mark.asyncio
    async def test_rejected_with_codes(self):
        """Test provider error codes are reported."""
        def handler(request):
            return httpx.Response(200, json={
                "success": False,
                "error-codes": ["invalid-input-response", "expired-input-response"],
            })

        verifier, _ = make_verifier(handler)
        result = await verifier.verify("token-1")

        assert result.ok is False
        assert result.error == (
            "hCaptcha verification failed: invalid-input-response, expired-input-response."
        )

    @pytest.mark.asyncio
    async def test_rejected_without_codes(self):
        """Test a rejection without codes reports an unknown error."""
        verifier, _ = make_verifier(lambda request: httpx.Response(200, json={"success": False}))
        result = await verifier.verify("token-1")

        assert result.error == "hCaptcha verification failed: unknown error."

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        """Test a non-2xx response is an unreachable provider."""
        verifier, _ = make_verifier(lambda request: httpx.Response(503, text="unavailable"))
        result = await verifier.verify("token-1")

        assert result.ok is False
        assert result.error == "Failed to reach hCaptcha verification service."

    @pytest.mark.asyncio
    async def test_network_failure(self):
        """Test a transport failure is an unreachable provider."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        verifier, _ = make_verifier(handler)
        result = await verifier.verify("token-1")

        assert result.error == "Failed to reach hCaptcha verification service."

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        """Test an unreadable body is an unreachable provider."""
        verifier, _ = make_verifier(lambda request: httpx.Response(200, text="<html>"))
        result = await verifier.verify("token-1")

        assert result.error == "Failed to reach hCaptcha verification service."

    @pytest.mark.asyncio
    async def test_missing_secret(self):
        """Test no request is made without a secret."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"success": True})

        verifier, _ = make_verifier(handler, secret=None)
        result = await verifier.verify("token-1")

        assert result.error == "Server misconfiguration: missing hCaptcha secret."
        assert calls == []
        assert verifier.configured is False

    @pytest.mark.asyncio
    async def test_aclose_keeps_shared_client(self):
        """Test closing the verifier leaves an injected client open."""
        verifier, client = make_verifier(lambda request: httpx.Response(200, json={"success": True}))
        await verifier.aclose()

        assert client.is_closed is False
        await client.aclose()

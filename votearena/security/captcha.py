"""
hCaptcha verification client.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from votearena.core.constants import HCAPTCHA_VERIFY_URL, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptchaResult:
    """Outcome of a CAPTCHA verification."""
    ok: bool
    error: Optional[str] = None


class HCaptchaVerifier:
    """
    Validates hCaptcha response tokens against the siteverify endpoint.

    Every failure mode (missing secret, unreachable provider, rejected token)
    is reported as a failed CaptchaResult rather than an exception.
    """

    def __init__(
        self,
        secret: Optional[str],
        verify_url: str = HCAPTCHA_VERIFY_URL,
        client: httpx.AsyncClient = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        """
        Initialize verifier.

        Args:
            secret: hCaptcha account secret
            verify_url: siteverify endpoint
            client: Shared HTTP client (one is created lazily if omitted)
            timeout: Request timeout for a lazily created client
        """
        self._secret = secret or None
        self.verify_url = verify_url
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return self._secret is not None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def verify(self, token: str, remote_ip: Optional[str] = None) -> CaptchaResult:
        """
        Verify a CAPTCHA response token.

        Args:
            token: Response token produced by the hCaptcha widget
            remote_ip: Caller's address, forwarded to hCaptcha when known

        Returns:
            CaptchaResult
        """
        if not self.configured:
            return CaptchaResult(ok=False, error="Server misconfiguration: missing hCaptcha secret.")

        form = {"secret": self._secret, "response": token}
        if remote_ip:
            form["remoteip"] = remote_ip

        try:
            response = await self.client.post(self.verify_url, data=form)
        except httpx.HTTPError as e:
            logger.warning(f"hCaptcha request failed: {e}")
            return CaptchaResult(ok=False, error="Failed to reach hCaptcha verification service.")

        if not response.is_success:
            logger.warning(f"hCaptcha returned HTTP {response.status_code}")
            return CaptchaResult(ok=False, error="Failed to reach hCaptcha verification service.")

        try:
            result = response.json()
        except ValueError:
            return CaptchaResult(ok=False, error="Failed to reach hCaptcha verification service.")

        if not isinstance(result, dict) or result.get("success") is not True:
            codes = result.get("error-codes") if isinstance(result, dict) else None
            codes = codes if isinstance(codes, list) else []
            reason = ", ".join(str(code) for code in codes) or "unknown error"
            return CaptchaResult(ok=False, error=f"hCaptcha verification failed: {reason}.")

        return CaptchaResult(ok=True)

    async def aclose(self):
        """Close the HTTP client if this verifier created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

"""
Supabase (PostgREST) client for VoteArena.

Provides the three operations the service needs from the ranked-entity
store: calling a stored procedure, selecting rows and counting rows.
Authenticates with the service role key.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from votearena.core.constants import HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class SupabaseError(Exception):
    """
    A PostgREST request failed.

    Attributes:
        message: Error message from the store (or the transport)
        status_code: HTTP status, None for transport failures
        code: PostgREST / Postgres error code, if any
    """

    def __init__(self, message: str, status_code: int = None, code: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class SupabaseClient:
    """
    Minimal async PostgREST client.

    One instance is shared by all requests; httpx.AsyncClient is safe for
    concurrent use.
    """

    def __init__(
        self,
        url: str,
        service_role_key: str,
        timeout: float = HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport = None,
    ):
        """
        Initialize client.

        Args:
            url: Project URL (https://<ref>.supabase.co)
            service_role_key: Service role key
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.url = url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=f"{self.url}/rest/v1",
            headers={
                "apikey": service_role_key,
                "Authorization": f"Bearer {service_role_key}",
            },
            timeout=timeout,
            transport=transport,
        )

    async def rpc(self, function: str, params: Dict[str, Any]) -> Any:
        """
        Call a stored procedure.

        Raises:
            SupabaseError: On transport failure or an error response
        """
        response = await self._request("POST", f"/rpc/{function}", json=params)
        if not response.content:
            return None
        return _decode_json(response)

    async def select(self, table: str, columns: str = "*") -> List[Dict[str, Any]]:
        """Select rows from a table or view."""
        response = await self._request("GET", f"/{table}", params={"select": columns})
        data = _decode_json(response)
        return data if isinstance(data, list) else []

    async def count(self, table: str) -> int:
        """Exact row count of a table."""
        response = await self._request(
            "HEAD",
            f"/{table}",
            params={"select": "*"},
            headers={"Prefer": "count=exact"},
        )
        return _parse_content_range_total(response.headers.get("content-range"))

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise SupabaseError(f"Failed to reach Supabase: {e}") from e

        if response.is_error:
            raise _error_from_response(response)
        return response

    async def aclose(self):
        await self._http.aclose()


def _decode_json(response: httpx.Response) -> Any:
    """Decode a successful response body, which must be JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise SupabaseError(
            f"Unreadable response from Supabase (status {response.status_code})",
            status_code=response.status_code,
        ) from e


def _error_from_response(response: httpx.Response) -> SupabaseError:
    """Build a SupabaseError from a PostgREST error body."""
    message: Optional[str] = None
    code: Optional[str] = None
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message") if isinstance(body.get("message"), str) else None
        code = body.get("code") if isinstance(body.get("code"), str) else None

    return SupabaseError(
        message or f"Supabase request failed with status {response.status_code}",
        status_code=response.status_code,
        code=code,
    )


def _parse_content_range_total(content_range: Optional[str]) -> int:
    """
    Parse the total from a Content-Range header.

    PostgREST sends ``0-24/3573`` or ``*/0``.
    """
    if not content_range or "/" not in content_range:
        return 0
    total = content_range.rsplit("/", 1)[1].strip()
    return int(total) if total.isdigit() else 0

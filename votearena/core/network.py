"""
Network identity of a caller.

The vote endpoint runs behind a proxy, so the caller's address comes from
forwarding headers before the socket peer.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from votearena.core.constants import UNKNOWN_NETWORK_ID


@dataclass(frozen=True)
class RequestContext:
    """
    Network identity of the request being handled.

    Attributes:
        remote_ip: Address as resolved from the request, None if unknown
    """
    remote_ip: Optional[str] = None

    @property
    def network_id(self) -> str:
        """Normalised identity used for token binding and the rating engine."""
        return self.remote_ip or UNKNOWN_NETWORK_ID


def _first_non_empty(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_remote_ip(headers: Mapping[str, str], client_host: str = None) -> Optional[str]:
    """
    Resolve the caller's address.

    Priority:
    1. First entry of X-Forwarded-For
    2. CF-Connecting-IP
    3. Socket peer address

    Args:
        headers: Request headers (case-insensitive mapping)
        client_host: Peer address from the transport, if any

    Returns:
        Address string or None
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        primary = _first_non_empty(forwarded.split(",")[0])
        if primary:
            return primary

    cf_ip = _first_non_empty(headers.get("cf-connecting-ip"))
    if cf_ip:
        return cf_ip

    return _first_non_empty(client_host)


def request_context_from(headers: Mapping[str, str], client_host: str = None) -> RequestContext:
    return RequestContext(remote_ip=resolve_remote_ip(headers, client_host))

"""
Rate limiting with slowapi.

SlowAPIMiddleware applies RATE_LIMITS["default"] to every route. The
recovery endpoints that restore or irreversibly delete by id use
limiter.shared_limit with a fixed scope, so every id counts against one
per-client bucket; a plain @limiter.limit would count each item path
separately. Counters are kept in memory unless RATE_LIMIT_STORAGE_URI
points at Redis.
"""

import ipaddress
import logging
from typing import Optional

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

# "count/period", period one of second, minute, hour, day
RATE_LIMITS = {
    "permanent_delete": "20/minute",
    "bulk_restore": "10/minute",
    "restore": "30/minute",
    "default": settings.rate_limit_default,
}


def _public_ip(value: Optional[str]) -> Optional[str]:
    """Return value if it is a public IP address, else None.

    Private and loopback addresses in forwarding headers are ignored: a
    client could otherwise pick a fresh bucket per request.
    """
    if not value:
        return None
    try:
        addr = ipaddress.ip_address(value.strip())
    except ValueError:
        return None
    if addr.is_private or addr.is_loopback or addr.is_link_local:
        return None
    return str(addr)


def client_ip(request: Request) -> str:
    """Rate-limit key: first forwarded public IP, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    candidate = _public_ip(forwarded.split(",")[0]) or _public_ip(
        request.headers.get("x-real-ip")
    )
    return candidate or get_remote_address(request)


limiter = Limiter(
    key_func=client_ip,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[RATE_LIMITS["default"]],
)
logger.debug("Rate limiter storage: %s", settings.rate_limit_storage_uri.split("://")[0])


def get_rate_limit(endpoint: str) -> str:
    """
    Limit string for a named endpoint group, falling back to the default.

    Example:
        >>> get_rate_limit("permanent_delete")
        "20/minute"
    """
    return RATE_LIMITS.get(endpoint, RATE_LIMITS["default"])

"""
Client IP resolution for FastAPI requests.

The gate sends the caller address to siteverify as ``remoteip``. By default
that is the address of the direct connection. Proxy headers are only read
when the deployment explicitly trusts them, since any client can forge them.
"""

from __future__ import annotations

from fastapi import Request

PROXY_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
    "X-Client-IP",
)


def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """Extract the client IP from a FastAPI ``Request``.

    With ``trust_proxy_headers`` the proxy headers are checked in priority
    order before falling back to the direct connection address:

    1. ``CF-Connecting-IP`` — Cloudflare
    2. ``True-Client-IP`` — Akamai and others
    3. ``X-Forwarded-For`` — standard proxy header (first IP in list)
    4. ``X-Real-IP`` — nginx / other reverse proxies
    5. ``X-Client-IP`` — less common

    Args:
        request: The current FastAPI ``Request`` object.
        trust_proxy_headers: Whether proxy headers may override the peer address.

    Returns:
        The resolved client IP string, or ``""`` if none can be found.
    """
    if trust_proxy_headers:
        for header in PROXY_HEADERS:
            ip_value: str | None = request.headers.get(header)
            if ip_value:
                client_ip: str = ip_value.split(",")[0].strip()
                if client_ip:
                    return client_ip

    return request.client.host if request.client else ""

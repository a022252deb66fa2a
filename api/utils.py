"""
Request helpers shared by API views.
"""
import ipaddress
from typing import Optional

from django.http import HttpRequest


def _parse_ip(value: Optional[str]) -> Optional[str]:
    """Return the normalized address, or None if value is not an IP address."""
    if not value:
        return None
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def get_client_ip(request: HttpRequest) -> Optional[str]:
    """
    Best-effort client IP.

    Prefers the first X-Forwarded-For entry, then X-Real-IP, then the socket
    peer address. Header values that are not IP addresses are skipped.
    """
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR", "")
    candidates = (
        forwarded_for.split(",")[0],
        request.META.get("HTTP_X_REAL_IP"),
        request.META.get("REMOTE_ADDR"),
    )
    for candidate in candidates:
        address = _parse_ip(candidate)
        if address:
            return address
    return None

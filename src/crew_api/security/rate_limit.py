"""Rate limiting configuration for security-sensitive endpoints."""

from ipaddress import ip_address, ip_network
from typing import Sequence

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from crew_api.config import get_settings


def _get_trusted_proxies() -> Sequence[str]:
    """Get list of trusted proxy IP ranges from configuration."""
    settings = get_settings()

    if settings.trusted_proxies_list:
        return settings.trusted_proxies_list

    # Default: trust localhost and common private ranges for development
    if settings.environment == "development":
        return ["127.0.0.1", "::1", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16"]

    return []


def _is_trusted_proxy(client_ip: str, trusted_proxies: Sequence[str]) -> bool:
    """Check if client IP is one of the trusted proxies (IP or CIDR range)."""
    if not trusted_proxies:
        return False

    try:
        addr = ip_address(client_ip)
        for proxy in trusted_proxies:
            if "/" in proxy:
                if addr in ip_network(proxy, strict=False):
                    return True
            elif addr == ip_address(proxy):
                return True
    except ValueError:
        return False

    return False


def get_real_client_ip(request: Request) -> str:
    """Extract real client IP, trusting X-Forwarded-For only from trusted proxies.

    Args:
        request: The incoming request object.

    Returns:
        The client IP address.
    """
    direct_ip = get_remote_address(request)

    if _is_trusted_proxy(direct_ip, _get_trusted_proxies()):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            client_ip = forwarded_for.split(",")[0].strip()
            try:
                ip_address(client_ip)
                return client_ip
            except ValueError:
                pass

    return direct_ip


_settings = get_settings()

# In-memory storage: the console runs as a single API process
limiter = Limiter(
    key_func=get_real_client_ip,
    default_limits=[f"{_settings.rate_limit_default}/minute"],
)

AUTH_SIGN_IN_LIMIT = f"{_settings.rate_limit_auth_sign_in}/minute"
AUTH_SIGN_UP_LIMIT = f"{_settings.rate_limit_auth_sign_up}/minute"
PLANNING_LIMIT = f"{_settings.rate_limit_planning}/minute"

"""Security package."""

from crew_api.security.auth import get_current_user, get_session_gate

__all__ = [
    "get_current_user",
    "get_session_gate",
]

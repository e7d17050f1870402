"""External collaborator integrations."""

from crew_api.providers.base import AuthProvider, GenerativeProvider
from crew_api.providers.gemini import GeminiProvider
from crew_api.providers.gotrue import GoTrueAuthProvider

__all__ = [
    "AuthProvider",
    "GenerativeProvider",
    "GeminiProvider",
    "GoTrueAuthProvider",
]

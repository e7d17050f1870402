"""Base interfaces of the external collaborators (auth, generative AI)."""

from abc import ABC, abstractmethod
from typing import Any

from crew_api.models.domain.user import AuthUser, Session


class AuthProvider(ABC):
    """Abstract base class for the hosted authentication provider."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Session:
        """Exchange email and password for a session.

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        pass

    @abstractmethod
    async def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> AuthUser:
        """Create an account.

        Args:
            email: Account email
            password: Account password
            metadata: Profile fields attached to the account (first_name, last_name, role)

        Raises:
            AuthenticationError: If the provider refuses the account
        """
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Revoke a session."""
        pass

    @abstractmethod
    async def get_user(self, access_token: str) -> AuthUser:
        """Look up the user owning an access token.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        pass


class GenerativeProvider(ABC):
    """Abstract base class for a generative AI text endpoint."""

    @abstractmethod
    async def generate_json(self, prompt: str, response_schema: dict[str, Any]) -> str:
        """Send a prompt constrained to a JSON output schema.

        Args:
            prompt: Natural-language prompt
            response_schema: JSON schema the reply must follow

        Returns:
            Raw reply text, expected (not guaranteed) to be JSON

        Raises:
            AIProviderError: If the call fails
        """
        pass

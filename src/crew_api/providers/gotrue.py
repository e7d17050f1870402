"""GoTrue-compatible hosted auth provider."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from crew_api.exceptions import AuthenticationError, CollaboratorError
from crew_api.models.domain.user import AuthUser, Session
from crew_api.providers.base import AuthProvider

logger = logging.getLogger(__name__)


class GoTrueAuthProvider(AuthProvider):
    """Auth provider speaking the GoTrue REST API over httpx."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0) -> None:
        """Initialize provider.

        Args:
            base_url: Auth API root (e.g. ``https://<project>.supabase.co/auth/v1``)
            api_key: Public API key sent as ``apikey``
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _get_headers(self, access_token: str | None = None) -> dict[str, str]:
        """Get API request headers."""
        headers = {
            "apikey": self.api_key,
            "Content-Type": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    headers=self._get_headers(access_token),
                    timeout=self.timeout,
                    **kwargs,
                )
        except httpx.HTTPError as e:
            logger.error("Auth provider request failed (%s %s): %s", method, path, e)
            raise CollaboratorError("Auth provider unavailable") from e

        if response.status_code in (400, 401, 403, 422):
            raise AuthenticationError()
        if response.status_code >= 500:
            logger.error("Auth provider returned %s on %s", response.status_code, path)
            raise CollaboratorError("Auth provider unavailable")
        return response

    @staticmethod
    def _parse_user(data: dict[str, Any]) -> AuthUser:
        return AuthUser(
            id=str(data["id"]),
            email=data.get("email") or "",
            metadata=data.get("user_metadata") or {},
        )

    async def sign_in(self, email: str, password: str) -> Session:
        """Password grant."""
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        data = response.json()
        user = self._parse_user(data["user"])

        expires_at = None
        if data.get("expires_in"):
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=int(data["expires_in"]))

        return Session(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            user_id=user.id,
            email=user.email,
            expires_at=expires_at,
        )

    async def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> AuthUser:
        """Create an account; profile fields travel as user metadata."""
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata},
        )
        data = response.json()
        # Depending on email confirmation the reply is a user or a session
        return self._parse_user(data.get("user") or data)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session owning the token."""
        await self._request("POST", "/logout", access_token=access_token)

    async def get_user(self, access_token: str) -> AuthUser:
        """Resolve the token to its user."""
        response = await self._request("GET", "/user", access_token=access_token)
        return self._parse_user(response.json())

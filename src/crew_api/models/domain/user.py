"""Authenticated caller domain models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_FIRST_NAME = "Utilisateur"
DEFAULT_USER_ROLE = "Directeur"


class Session(BaseModel):
    """Session issued by the auth provider."""

    access_token: str
    refresh_token: str | None = None
    user_id: str
    email: str = ""
    expires_at: datetime | None = None


class UserProfile(BaseModel):
    """Profile row attached to an auth user."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None


class CurrentUser(BaseModel):
    """Caller identity decorated with profile data."""

    id: str
    email: str = ""
    first_name: str = DEFAULT_FIRST_NAME
    last_name: str = ""
    role: str = DEFAULT_USER_ROLE

    @property
    def display_name(self) -> str:
        """Name written into activity logs."""
        return f"{self.first_name} {self.last_name}".strip()


# Actor used by scheduled jobs
SYSTEM_USER = CurrentUser(id="system", first_name="Système", last_name="", role="system")


class AuthUser(BaseModel):
    """User account as known by the auth provider."""

    id: str
    email: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

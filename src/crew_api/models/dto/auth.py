"""Authentication DTOs."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from crew_api.models.domain.user import DEFAULT_USER_ROLE


class SignInRequest(BaseModel):
    """Sign-in request."""

    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class SignUpRequest(BaseModel):
    """Account creation request."""

    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(default="", max_length=255)
    role: str = Field(default=DEFAULT_USER_ROLE, max_length=100)


class ProfileUpdateRequest(BaseModel):
    """Profile rename request."""

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(default="", max_length=255)


class UserInfo(BaseModel):
    """Caller identity DTO."""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    display_name: str


class SessionResponse(BaseModel):
    """Session issued on sign-in."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_at: datetime | None = None
    user: UserInfo


class SignUpResponse(BaseModel):
    """Created account."""

    id: str
    email: str

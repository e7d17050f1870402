"""Authentication dependencies."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from crew_api.config import get_settings
from crew_api.database import get_record_store
from crew_api.exceptions import AuthenticationError
from crew_api.models.domain.user import CurrentUser
from crew_api.providers.base import AuthProvider
from crew_api.providers.gotrue import GoTrueAuthProvider
from crew_api.repositories.store import RecordStore
from crew_api.services.session_service import SessionGate

security = HTTPBearer(auto_error=False)


@lru_cache
def get_auth_provider() -> AuthProvider:
    """Get the hosted auth provider client."""
    settings = get_settings()
    return GoTrueAuthProvider(settings.auth_url, settings.auth_api_key)


def get_session_gate(
    store: RecordStore = Depends(get_record_store),
    auth: AuthProvider = Depends(get_auth_provider),
) -> SessionGate:
    """Get a SessionGate for the request."""
    settings = get_settings()
    return SessionGate(
        auth,
        store,
        jwt_secret=settings.auth_jwt_secret,
        jwt_algorithm=settings.auth_jwt_algorithm,
        jwt_audience=settings.auth_jwt_audience or None,
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    gate: Annotated[SessionGate, Depends(get_session_gate)],
) -> CurrentUser:
    """Get the current authenticated user from the bearer token.

    Raises:
        HTTPException: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await gate.authenticate(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

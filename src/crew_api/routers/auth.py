"""Authentication router: email / password sessions against the hosted auth provider."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.auth import (
    ProfileUpdateRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    UserInfo,
)
from crew_api.security.auth import get_current_user, get_session_gate
from crew_api.security.rate_limit import AUTH_SIGN_IN_LIMIT, AUTH_SIGN_UP_LIMIT, limiter
from crew_api.services.session_service import SessionGate

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_info(user: CurrentUser) -> UserInfo:
    return UserInfo(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        display_name=user.display_name,
    )


@router.post("/sign-in", response_model=SessionResponse)
@limiter.limit(AUTH_SIGN_IN_LIMIT)
async def sign_in(
    request: Request,
    body: SignInRequest,
    gate: Annotated[SessionGate, Depends(get_session_gate)],
) -> SessionResponse:
    """Sign in with email and password."""
    user = await gate.sign_in(body.email, body.password)
    session = gate.current_session()
    return SessionResponse(
        access_token=session.access_token if session else "",
        refresh_token=session.refresh_token if session else None,
        expires_at=session.expires_at if session else None,
        user=_user_info(user),
    )


@router.post("/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_SIGN_UP_LIMIT)
async def sign_up(
    request: Request,
    body: SignUpRequest,
    gate: Annotated[SessionGate, Depends(get_session_gate)],
) -> SignUpResponse:
    """Create an account and its profile."""
    account = await gate.sign_up(
        body.email,
        body.password,
        body.first_name,
        body.last_name,
        body.role,
    )
    return SignUpResponse(id=account.id, email=account.email or body.email)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    gate: Annotated[SessionGate, Depends(get_session_gate)],
) -> None:
    """Revoke the caller's session."""
    await gate.sign_out()
    logger.info("User %s signed out", current_user.id)


@router.get("/me", response_model=UserInfo)
async def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserInfo:
    """Get the caller identity."""
    return _user_info(current_user)


@router.patch("/me", response_model=UserInfo)
async def update_me(
    body: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    gate: Annotated[SessionGate, Depends(get_session_gate)],
) -> UserInfo:
    """Rename the caller."""
    updated = await gate.update_profile(current_user, body.first_name, body.last_name)
    return _user_info(updated)

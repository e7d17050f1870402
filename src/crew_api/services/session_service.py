"""Session / profile gate.

Resolves whether a caller is authenticated and decorates the caller identity
(display name, role) from its profile.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from jose import JWTError, jwt

from crew_api.exceptions import AuthenticationError, CrewAPIError
from crew_api.models.domain.user import (
    DEFAULT_FIRST_NAME,
    DEFAULT_USER_ROLE,
    AuthUser,
    CurrentUser,
    Session,
)
from crew_api.providers.base import AuthProvider
from crew_api.repositories.store import RecordStore
from crew_api.utils.validation import title_case

logger = logging.getLogger(__name__)


class AuthEvent(StrEnum):
    """Session change notifications."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthListener = Callable[[AuthEvent, CurrentUser | None], Awaitable[None] | None]


class SessionGate:
    """Authentication gate in front of the console.

    An invalid or expired session is cleared and reported as
    unauthenticated.
    """

    def __init__(
        self,
        auth: AuthProvider,
        store: RecordStore,
        jwt_secret: str = "",
        jwt_algorithm: str = "HS256",
        jwt_audience: str | None = "authenticated",
    ) -> None:
        """Initialize gate.

        Args:
            auth: Auth provider
            store: Record store holding user profiles
            jwt_secret: Secret signing the provider's access tokens; when set,
                tokens are verified locally instead of calling the provider
            jwt_algorithm: Token signing algorithm
            jwt_audience: Expected token audience
        """
        self.auth = auth
        self.store = store
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.jwt_audience = jwt_audience
        self._session: Session | None = None
        self._user: CurrentUser | None = None
        self._listeners: list[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener for sign-in / sign-out events.

        Returns:
            Function removing the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self, event: AuthEvent, user: CurrentUser | None) -> None:
        for listener in list(self._listeners):
            try:
                outcome = listener(event, user)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                # A failing listener must not break the session change
                logger.error("Auth listener failed on %s: %s", event.value, e)

    def _clear(self) -> None:
        self._session = None
        self._user = None

    def current_session(self) -> Session | None:
        """Current session, or None if there is none or it has expired."""
        if self._session is None:
            return None
        expires_at = self._session.expires_at
        if expires_at is not None and expires_at <= datetime.now(timezone.utc):
            logger.info("Session of user %s expired", self._session.user_id)
            self._clear()
            return None
        return self._session

    @property
    def current_user(self) -> CurrentUser | None:
        """Identity attached to the current session."""
        return self._user if self.current_session() is not None else None

    async def sign_in(self, email: str, password: str) -> CurrentUser:
        """Sign in with email and password.

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        try:
            session = await self.auth.sign_in(email, password)
        except AuthenticationError:
            self._clear()
            raise

        user = await self.resolve_user(session)
        self._session = session
        self._user = user
        logger.info("User %s signed in", session.user_id)
        await self._notify(AuthEvent.SIGNED_IN, user)
        return user

    async def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: str = DEFAULT_USER_ROLE,
    ) -> AuthUser:
        """Create an account and its profile.

        Raises:
            AuthenticationError: If the provider refuses the account
        """
        metadata = {"first_name": first_name, "last_name": last_name, "role": role}
        account = await self.auth.sign_up(email, password, metadata)
        try:
            await self.store.update_profile(
                account.id,
                title_case(first_name),
                title_case(last_name),
                role,
            )
        except CrewAPIError as e:
            logger.warning("Profile of new user %s not saved: %s", account.id, e.message)
        logger.info("User %s signed up", account.id)
        return account

    async def sign_out(self) -> None:
        """End the current session; local state is cleared even if revocation fails."""
        session = self._session
        self._clear()
        if session is not None:
            try:
                await self.auth.sign_out(session.access_token)
            except CrewAPIError as e:
                logger.warning("Session revocation failed for %s: %s", session.user_id, e.message)
        await self._notify(AuthEvent.SIGNED_OUT, None)

    def _decode_token(self, token: str) -> dict[str, Any]:
        options = {"verify_aud": self.jwt_audience is not None}
        try:
            return jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                audience=self.jwt_audience,
                options=options,
            )
        except JWTError as e:
            raise AuthenticationError("Invalid or expired session") from e

    async def authenticate(self, access_token: str) -> CurrentUser:
        """Resolve a bearer token to the caller identity.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        try:
            if self.jwt_secret:
                claims = self._decode_token(access_token)
                if not claims.get("sub"):
                    raise AuthenticationError("Invalid or expired session")
                expires_at = None
                if claims.get("exp"):
                    expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc)
                session = Session(
                    access_token=access_token,
                    user_id=str(claims["sub"]),
                    email=claims.get("email") or "",
                    expires_at=expires_at,
                )
            else:
                account = await self.auth.get_user(access_token)
                session = Session(access_token=access_token, user_id=account.id, email=account.email)
        except AuthenticationError:
            if self._session is not None and self._session.access_token == access_token:
                self._clear()
            raise

        user = await self.resolve_user(session)
        self._session = session
        self._user = user
        return user

    async def resolve_user(self, session: Session) -> CurrentUser:
        """Decorate a session with its profile.

        Names are title-cased; a missing profile falls back to the default
        first name and role.
        """
        try:
            profile = await self.store.get_profile(session.user_id)
        except CrewAPIError as e:
            logger.warning("Profile lookup failed for %s: %s", session.user_id, e.message)
            profile = None

        first_name = profile.first_name if profile and profile.first_name else DEFAULT_FIRST_NAME
        last_name = profile.last_name if profile and profile.last_name else ""
        role = profile.role if profile and profile.role else DEFAULT_USER_ROLE
        return CurrentUser(
            id=session.user_id,
            email=session.email,
            first_name=title_case(first_name),
            last_name=title_case(last_name),
            role=role,
        )

    async def update_profile(self, user: CurrentUser, first_name: str, last_name: str) -> CurrentUser:
        """Rename the caller.

        Raises:
            PersistenceError: If the store rejects the update
        """
        profile = await self.store.update_profile(user.id, title_case(first_name), title_case(last_name))
        updated = user.model_copy(
            update={
                "first_name": title_case(profile.first_name) or DEFAULT_FIRST_NAME,
                "last_name": title_case(profile.last_name),
            }
        )
        if self._user is not None and self._user.id == user.id:
            self._user = updated
        return updated

"""Session context - the logged-in actor's identity and token."""

import logging
from collections.abc import Callable

from foodly_schemas import CurrentUser, LoginResult, UserRole

from apps.web.ordering.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

LogoutListener = Callable[[], None]


class SessionContext:
    """
    Identity of the current actor, passed explicitly to every component.

    Holds the bearer token plus the cached role/user id/restaurant id.
    A 401 from the backend calls expire(), which clears all of them and
    notifies listeners (typically: navigate back to the login screen).
    """

    def __init__(self) -> None:
        self._token: str | None = None
        self._user: CurrentUser | None = None
        self._listeners: list[LogoutListener] = []

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token) and self._user is not None

    def login(
        self, result: LoginResult, role: UserRole, username: str = ""
    ) -> CurrentUser:
        """Store a successful login result and return the new identity."""
        self._token = result.token
        self._user = CurrentUser(
            user_id=result.user_id,
            role=role,
            username=username,
            restaurant_id=result.restaurant_id,
        )
        logger.info("Logged in as %s (%s, id=%s)", username, role.value, result.user_id)
        return self._user

    def logout(self) -> None:
        """Discard the token and identity; listeners fire only if someone was logged in."""
        was_authenticated = self._token is not None
        self._token = None
        self._user = None
        if not was_authenticated:
            return
        logger.info("Session ended")
        for listener in list(self._listeners):
            listener()

    def expire(self) -> None:
        """Called when the backend rejects the token."""
        logger.warning("Session token rejected by backend - forcing re-login")
        self.logout()

    def current_user(self) -> CurrentUser | None:
        return self._user

    def require_user(self) -> CurrentUser:
        """Return the current identity or raise if nobody is logged in."""
        if self._user is None or not self._token:
            raise AuthenticationError("Not logged in", status_code=None)
        return self._user

    def on_logout(self, listener: LogoutListener) -> Callable[[], None]:
        """
        Register a callback fired on logout or token expiry.

        Returns:
            A function that unregisters the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

"""Login, signup and logout against the ordering backend."""

import logging

from foodly_schemas import CurrentUser, LoginResult, SignupRequest, UserRole

from apps.web.ordering.api import BackendClient, parse_model

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
SIGNUP_PATH = "/auth/signup"


class AuthClient:
    """Authenticates an actor and records the identity in the session."""

    def __init__(self, api: BackendClient) -> None:
        self.api = api

    async def login(self, username: str, password: str, role: UserRole) -> CurrentUser:
        """
        Log in and store the token and identity in the session.

        Raises:
            AuthenticationError: Credentials or role rejected.
        """
        data = await self.api.post(
            LOGIN_PATH,
            json={"username": username, "password": password, "role": role.value},
            public=True,
        )
        result = parse_model(LoginResult, data, LOGIN_PATH)
        return self.api.session.login(result, role, username=username)

    async def signup(self, request: SignupRequest) -> None:
        """Register a customer or restaurant owner."""
        await self.api.post(SIGNUP_PATH, json=request.to_wire(), public=True)
        logger.info("Registered %s as %s", request.username, request.role.value)

    def logout(self) -> None:
        self.api.session.logout()

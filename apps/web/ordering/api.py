"""Backend REST transport - authenticated JSON requests with typed errors."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from apps.web.config import settings
from apps.web.ordering.exceptions import (
    APIError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
)
from apps.web.ordering.session import SessionContext

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def parse_model(model: type[_M], data: Any, path: str) -> _M:
    """
    Validate a response body against a schema.

    Raises:
        APIError: The body does not match the schema.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected %s payload from %s: %s", model.__name__, path, e)
        raise APIError(
            f"Unexpected response from {path}: {e.error_count()} invalid field(s)"
        ) from e


def parse_list(model: type[_M], data: Any, path: str) -> list[_M]:
    """Validate a JSON array response; an empty body is an empty list."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise APIError(f"Unexpected response from {path}: expected a list")
    return [parse_model(model, raw, path) for raw in data]


class BackendClient:
    """
    Thin async wrapper over the ordering backend's REST API.

    Every authenticated call sends the session's bearer token. Non-2xx
    responses become typed errors carrying the HTTP status and the server's
    message. Nothing is retried here; polling loops retry on their next tick
    and one-shot actions are re-triggered by the user.
    """

    def __init__(
        self,
        session: SessionContext,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the backend client.

        Args:
            session: Session context providing the bearer token.
            base_url: Backend root URL (defaults to settings.API_BASE_URL).
            http_client: Optional HTTP client for dependency injection (testing).
        """
        self.session = session
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)
        self._owns_client = http_client is None

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    # =========================================================================
    # Verbs
    # =========================================================================

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        public: bool = False,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path below the base URL, e.g. "/api/cart".
            json: Optional JSON body.
            params: Optional query parameters.
            public: Skip the Authorization header (catalog, login, signup).

        Returns:
            Decoded JSON, or None for an empty body.

        Raises:
            AuthenticationError: No token, or the backend answered 401.
            AuthorizationError: The backend answered 403.
            NotFoundError: The backend answered 404.
            ConflictError: The backend answered 409.
            APIError: Any other failure, including transport errors.
        """
        headers: dict[str, str] = {}
        if not public:
            token = self.session.token
            if not token:
                raise AuthenticationError("Not logged in", status_code=None)
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("API request: %s %s", method, path)
        try:
            response = await self._client.request(
                method, self.url(path), headers=headers, json=json, params=params
            )
        except httpx.RequestError as e:
            logger.warning("API request %s %s failed: %s", method, path, e)
            raise APIError(f"Request to {path} failed: {e}") from e

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise APIError(
                    f"Invalid JSON from {path}",
                    status_code=response.status_code,
                    response_body=response.text,
                ) from e

        self._raise_for_status(method, path, response, public=public)

    def _raise_for_status(
        self, method: str, path: str, response: httpx.Response, public: bool = False
    ) -> None:
        status = response.status_code
        message = self._error_message(response)
        body = response.text
        logger.warning("API %s %s returned %d: %s", method, path, status, message)

        if status == 401:
            if public:
                # Rejected credentials, not an expired session
                raise AuthenticationError(
                    message or "Invalid credentials", status_code=status, response_body=body
                )
            self.session.expire()
            raise AuthenticationError(
                "Authentication failed. Please login again.",
                status_code=status,
                response_body=body,
            )
        if status == 403:
            raise AuthorizationError(
                message or "Access denied. You do not have permission to perform this action.",
                status_code=status,
                response_body=body,
            )
        if status == 404:
            raise NotFoundError(message or "Resource not found", status, body)
        if status == 409:
            raise ConflictError(message or "Resource already exists", status, body)
        raise APIError(message or f"HTTP error! status: {status}", status, body)

    def _error_message(self, response: httpx.Response) -> str:
        """Pull the server-provided message out of an error response."""
        try:
            data = response.json()
        except ValueError:
            return response.reason_phrase or ""
        if isinstance(data, dict):
            return str(data.get("error") or data.get("message") or "")
        return ""

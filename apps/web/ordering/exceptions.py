"""Ordering client exceptions."""


class OrderingError(Exception):
    """Base exception for ordering client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class APIError(OrderingError):
    """Request to the ordering backend failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class AuthenticationError(APIError):
    """Token missing, expired or rejected - the user must log in again."""

    def __init__(
        self,
        message: str = "Authentication failed. Please login again.",
        status_code: int | None = 401,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message, status_code, response_body)


class AuthorizationError(APIError):
    """The actor may not perform this action (e.g. another restaurant's order)."""


class NotFoundError(APIError):
    """The requested resource does not exist."""


class ConflictError(APIError):
    """The resource already exists (e.g. duplicate favorite)."""


class CartError(OrderingError):
    """Cart contents cannot be submitted."""


class InvalidCartError(CartError):
    """Cart cannot be turned into an order."""


class IncompleteCartItemError(CartError):
    """A cart line is missing its menu item or restaurant id."""

    def __init__(self, message: str, item_name: str | None = None) -> None:
        super().__init__(message)
        self.item_name = item_name


class MixedRestaurantCartError(CartError):
    """Item belongs to a different restaurant than the rest of the cart."""

    def __init__(
        self,
        message: str,
        cart_restaurant_id: int | None = None,
        item_restaurant_id: int | None = None,
    ) -> None:
        super().__init__(message)
        self.cart_restaurant_id = cart_restaurant_id
        self.item_restaurant_id = item_restaurant_id


class IllegalTransitionError(OrderingError):
    """Requested status change is not allowed from the order's current status."""

    def __init__(
        self,
        message: str,
        order_id: int | None = None,
        current_status: str | None = None,
    ) -> None:
        super().__init__(message)
        self.order_id = order_id
        self.current_status = current_status


class ChatUnavailableError(OrderingError):
    """Chat cannot be opened or used for this order."""

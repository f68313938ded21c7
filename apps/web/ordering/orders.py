"""Order client - order creation, role-scoped listings and status updates."""

import logging

from foodly_schemas import (
    Cart,
    Order,
    OrderRequest,
    OrderStatus,
    PaymentMethod,
    UserRole,
)

from apps.web.ordering import pricing, status
from apps.web.ordering.api import BackendClient, parse_list, parse_model
from apps.web.ordering.cart import sanitize_items
from apps.web.ordering.exceptions import (
    IllegalTransitionError,
    IncompleteCartItemError,
    InvalidCartError,
)

logger = logging.getLogger(__name__)

ORDERS_PATH = "/api/orders"
MY_ORDERS_PATH = "/api/orders/my"
ADMIN_ORDERS_PATH = "/api/admin/orders"


def resolve_restaurant_id(cart: Cart, fallback: int | None = None) -> int:
    """
    First restaurant id found on the cart's lines, else the fallback.

    Raises:
        InvalidCartError: No restaurant id can be resolved.
    """
    for item in cart.items:
        if item.restaurant_id is not None:
            return item.restaurant_id
    if fallback is not None:
        return fallback
    raise InvalidCartError("No restaurant found in cart")


class OrderClient:
    """Typed wrapper for the backend's order endpoints."""

    def __init__(self, api: BackendClient) -> None:
        self.api = api

    # =========================================================================
    # Creation
    # =========================================================================

    def build_request(
        self,
        cart: Cart,
        payment_method: PaymentMethod,
        coupon_code: str | None = None,
        fallback_restaurant_id: int | None = None,
    ) -> OrderRequest:
        """
        Validate a cart and shape the order creation body.

        Raises:
            InvalidCartError: Empty cart, no delivery address, or no
                resolvable restaurant id.
        """
        if not cart.items:
            raise InvalidCartError("Cart is empty")
        if not cart.delivery_address.strip():
            raise InvalidCartError("Delivery address is required")

        restaurant_id = resolve_restaurant_id(cart, fallback_restaurant_id)
        try:
            items = sanitize_items(cart.items, restaurant_id)
        except IncompleteCartItemError as e:
            raise InvalidCartError(e.message) from e

        coupon = (coupon_code or "").strip()
        quote = pricing.quote(cart.subtotal, coupon_applied=bool(coupon))
        return OrderRequest(
            items=[item.to_wire() for item in items],
            address=cart.delivery_address,
            coupon=coupon,
            payment=payment_method,
            discount=quote.discount,
            total=quote.total,
        )

    async def place_order(
        self,
        cart: Cart,
        payment_method: PaymentMethod,
        coupon_code: str | None = None,
        fallback_restaurant_id: int | None = None,
    ) -> Order:
        """
        Submit a cart snapshot as a new order.

        The caller clears the cart once this returns.

        Args:
            cart: Cart to order from.
            payment_method: How the customer pays.
            coupon_code: Applied coupon, if any.
            fallback_restaurant_id: Restaurant of the current page, used when
                no cart line carries one.

        Returns:
            The created order.

        Raises:
            InvalidCartError: The cart cannot be ordered (no request is sent).
            APIError: The backend rejected the order.
        """
        request = self.build_request(
            cart, payment_method, coupon_code, fallback_restaurant_id
        )
        data = await self.api.post(ORDERS_PATH, json=request.to_wire())
        order = parse_model(Order, data, ORDERS_PATH)
        logger.info(
            "Order %s placed: %d items, total %s", order.id, len(request.items), request.total
        )
        return order

    # =========================================================================
    # Reads (the backend decides visibility)
    # =========================================================================

    async def get(self, order_id: int) -> Order:
        path = f"{ORDERS_PATH}/{order_id}"
        return parse_model(Order, await self.api.get(path), path)

    async def list_mine(self) -> list[Order]:
        return await self._list(MY_ORDERS_PATH)

    async def list_for_restaurant(self, restaurant_id: int) -> list[Order]:
        return await self._list(f"/api/restaurants/{restaurant_id}/orders")

    async def list_all(self) -> list[Order]:
        return await self._list(ADMIN_ORDERS_PATH)

    async def _list(self, path: str) -> list[Order]:
        return parse_list(Order, await self.api.get(path), path)

    # =========================================================================
    # Status updates
    # =========================================================================

    async def update_status(self, order_id: int, new_status: OrderStatus) -> Order | None:
        """
        Ask the backend to move an order to a new status.

        Legality is enforced by the backend; use advance()/cancel() to only
        request transitions the status machine allows.
        """
        path = f"{ORDERS_PATH}/{order_id}/status"
        data = await self.api.put(path, json={"status": new_status.value})
        logger.info("Order %s status -> %s", order_id, new_status.value)
        return parse_model(Order, data, path) if data else None

    async def advance(self, order: Order) -> Order | None:
        """Move an order one step forward."""
        target = status.next_status(order.status)
        if target is None:
            raise IllegalTransitionError(
                f"Order {order.id} cannot advance from {status.label(order.status)}",
                order_id=order.id,
                current_status=status.label(order.status),
            )
        return await self.update_status(order.id, target)

    async def cancel(self, order: Order) -> Order | None:
        """
        Cancel an order that is still New.

        Admins go through the admin cancel endpoint; the status endpoint only
        accepts the owning restaurant.
        """
        if not status.can_cancel(order.status):
            raise IllegalTransitionError(
                f"Order {order.id} cannot be cancelled from {status.label(order.status)}",
                order_id=order.id,
                current_status=status.label(order.status),
            )
        user = self.api.session.current_user()
        if user is not None and user.role == UserRole.ADMIN:
            path = f"{ADMIN_ORDERS_PATH}/{order.id}/cancel"
            data = await self.api.patch(path)
            logger.info("Order %s cancelled by admin", order.id)
            return parse_model(Order, data, path) if data else None
        return await self.update_status(order.id, OrderStatus.CANCELLED)

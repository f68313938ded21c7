"""
Checkout service - turns the staged cart into an order.

Handles:
1. Validating the cart before any request
2. Submitting the order with computed discount and total
3. Clearing the cart only after the backend created the order
"""

import logging

from foodly_schemas import Order, PaymentMethod

from apps.web.ordering.cart import CartStore
from apps.web.ordering.exceptions import OrderingError
from apps.web.ordering.orders import OrderClient

logger = logging.getLogger(__name__)


async def checkout(
    cart_store: CartStore,
    orders: OrderClient,
    payment_method: PaymentMethod,
    coupon_code: str | None = None,
) -> Order:
    """
    Place an order from the store's cart, then empty the cart.

    Not retried on failure: the customer re-triggers checkout.

    Args:
        cart_store: The customer's cart store (already loaded).
        orders: Order client bound to the same session.
        payment_method: How the customer pays.
        coupon_code: Applied coupon, if any.

    Returns:
        The created order.

    Raises:
        InvalidCartError: The cart cannot be ordered; nothing was sent.
        APIError: The backend rejected the order; the cart is untouched.
    """
    order = await orders.place_order(
        cart_store.cart,
        payment_method,
        coupon_code=coupon_code,
        fallback_restaurant_id=cart_store.restaurant_id,
    )
    try:
        await cart_store.clear()
    except OrderingError as e:
        # The order exists; a stale server cart is reconciled on next load
        logger.warning("Order %s placed but cart clear failed: %s", order.id, e)
    return order

"""
Cart store - the server-confirmed staging area for the next order.

Every mutation sends the full item list to the backend and replaces local
state with the server's response. Nothing is applied optimistically.
"""

import logging

from foodly_schemas import Cart, CartItem, MenuItem

from apps.web.ordering.api import BackendClient, parse_model
from apps.web.ordering.exceptions import (
    IncompleteCartItemError,
    MixedRestaurantCartError,
    OrderingError,
)

logger = logging.getLogger(__name__)

CART_PATH = "/api/cart"


def sanitize_items(
    items: list[CartItem], restaurant_id: int | None = None
) -> list[CartItem]:
    """
    Ensure every line carries a menu item id and a restaurant id.

    Args:
        items: Lines about to be submitted.
        restaurant_id: Restaurant to assume for lines that lack one.

    Raises:
        IncompleteCartItemError: A line has no menu item id, or no restaurant
            id can be resolved for it.
    """
    fallback = restaurant_id
    if fallback is None:
        fallback = next(
            (i.restaurant_id for i in items if i.restaurant_id is not None), None
        )

    sanitized: list[CartItem] = []
    for item in items:
        if item.menu_item_id is None:
            raise IncompleteCartItemError(
                f"Cart item '{item.name}' has no menu_item_id",
                item_name=item.name,
            )
        if item.restaurant_id is None:
            if fallback is None:
                raise IncompleteCartItemError(
                    f"Cart item '{item.name}' has no restaurantId",
                    item_name=item.name,
                )
            item = item.model_copy(update={"restaurant_id": fallback})
        sanitized.append(item)
    return sanitized


class CartStore:
    """
    Local mirror of the customer's server-side cart.

    Carts hold items from a single restaurant; adding an item from another
    restaurant is rejected before any request is made.
    """

    def __init__(self, api: BackendClient, restaurant_id: int | None = None) -> None:
        """
        Args:
            api: Backend transport bound to the customer's session.
            restaurant_id: Restaurant of the page the customer is browsing,
                used for lines that arrive without one.
        """
        self.api = api
        self.restaurant_id = restaurant_id
        self.cart = Cart.empty()

    @property
    def items(self) -> list[CartItem]:
        return self.cart.items

    async def load(self) -> Cart:
        """Fetch the authoritative cart; an empty cart if that fails."""
        if not self.api.session.token:
            self.cart = Cart.empty()
            return self.cart
        try:
            data = await self.api.get(CART_PATH)
            self.cart = parse_model(Cart, data or {}, CART_PATH)
        except OrderingError as e:
            logger.warning("Could not load cart, starting empty: %s", e)
            self.cart = Cart.empty()
        return self.cart

    async def add(self, menu_item: MenuItem, restaurant_id: int | None = None) -> Cart:
        """
        Add one unit of a menu item.

        Increments the quantity if the item is already in the cart,
        otherwise appends a new line with quantity 1.

        Raises:
            IncompleteCartItemError: The menu item has no id.
            MixedRestaurantCartError: The cart holds another restaurant's items.
        """
        if menu_item.id is None:
            raise IncompleteCartItemError(
                f"Menu item '{menu_item.name}' has no id", item_name=menu_item.name
            )

        item_restaurant = (
            menu_item.restaurant_id
            if menu_item.restaurant_id is not None
            else restaurant_id if restaurant_id is not None else self.restaurant_id
        )
        self._check_single_restaurant(item_restaurant, menu_item.name)

        existing = self.cart.find(menu_item.id)
        if existing is not None:
            items = [
                i.model_copy(update={"quantity": i.quantity + 1})
                if i.menu_item_id == menu_item.id
                else i
                for i in self.cart.items
            ]
        else:
            items = [
                *self.cart.items,
                CartItem(
                    menu_item_id=menu_item.id,
                    name=menu_item.name,
                    unit_price=menu_item.price,
                    quantity=1,
                    restaurant_id=item_restaurant,
                ),
            ]
        return await self._push(items)

    async def set_item_quantity(self, item: CartItem, quantity: int) -> Cart:
        """Replace a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            return await self.remove(item)

        items: list[CartItem] = []
        for line in self.cart.items:
            if line.menu_item_id == item.menu_item_id:
                update: dict = {"quantity": quantity}
                if line.restaurant_id is None and item.restaurant_id is not None:
                    update["restaurant_id"] = item.restaurant_id
                line = line.model_copy(update=update)
            items.append(line)
        return await self._push(items)

    async def remove(self, item: CartItem) -> Cart:
        items = [i for i in self.cart.items if i.menu_item_id != item.menu_item_id]
        return await self._push(items)

    async def set_address(self, address: str) -> Cart:
        """Record the delivery address and push it with the current items."""
        return await self._push(list(self.cart.items), address=address)

    async def clear(self) -> Cart:
        """Empty the cart on the server, then locally."""
        await self.api.delete(CART_PATH)
        self.cart = Cart.empty()
        logger.debug("Cart cleared")
        return self.cart

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_single_restaurant(self, restaurant_id: int | None, name: str) -> None:
        current = self.cart.restaurant_ids
        if restaurant_id is not None and current and restaurant_id not in current:
            cart_restaurant = next(iter(current))
            raise MixedRestaurantCartError(
                f"Cannot add '{name}' from restaurant {restaurant_id}: "
                f"cart already holds items from restaurant {cart_restaurant}",
                cart_restaurant_id=cart_restaurant,
                item_restaurant_id=restaurant_id,
            )

    async def _push(self, items: list[CartItem], address: str | None = None) -> Cart:
        """Submit the full item list and adopt the server's response."""
        sanitized = sanitize_items(items, self.restaurant_id)
        if address is None:
            address = self.cart.delivery_address
        data = await self.api.put(
            CART_PATH,
            json={
                "items": [i.to_wire() for i in sanitized],
                "address": address,
            },
        )
        cart = parse_model(Cart, data or {}, CART_PATH)
        # The backend does not store the address; keep ours if it echoes none
        if not cart.delivery_address and address:
            cart = cart.model_copy(update={"delivery_address": address})
        self.cart = cart
        return self.cart

"""Tests for CartStore - server-confirmed cart mutations."""

import json
from decimal import Decimal

import httpx
import pytest
import respx
from foodly_schemas import Cart, CartItem, MenuItem

from apps.web.ordering.api import BackendClient
from apps.web.ordering.cart import CartStore, sanitize_items
from apps.web.ordering.exceptions import (
    APIError,
    IncompleteCartItemError,
    MixedRestaurantCartError,
)

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store(api: BackendClient) -> CartStore:
    return CartStore(api, restaurant_id=1)


@pytest.fixture
def server_cart() -> dict:
    """Cart as returned by GET /api/cart."""
    return {
        "items": [
            {
                "menu_item_id": 7,
                "name": "Margherita",
                "price": 12.0,
                "qty": 2,
                "restaurantId": 1,
            }
        ]
    }


def echo_cart(request: httpx.Request) -> httpx.Response:
    """Respond to PUT /api/cart with the submitted items."""
    body = json.loads(request.content)
    return httpx.Response(200, json={"items": body["items"]})


def sent_items(route: respx.Route) -> list[dict]:
    return json.loads(route.calls.last.request.content)["items"]


# =============================================================================
# sanitize_items
# =============================================================================


class TestSanitizeItems:
    """Tests for pre-submit line validation."""

    def test_fills_missing_restaurant_from_argument(self) -> None:
        items = [CartItem(menu_item_id=7, name="Margherita", quantity=1)]

        result = sanitize_items(items, restaurant_id=3)

        assert result[0].restaurant_id == 3

    def test_falls_back_to_first_line_restaurant(self) -> None:
        items = [
            CartItem(menu_item_id=7, name="Margherita", restaurant_id=5),
            CartItem(menu_item_id=8, name="Garlic Bread"),
        ]

        result = sanitize_items(items)

        assert [i.restaurant_id for i in result] == [5, 5]

    def test_missing_menu_item_id(self) -> None:
        items = [CartItem(name="Mystery", restaurant_id=1)]

        with pytest.raises(IncompleteCartItemError) as exc_info:
            sanitize_items(items)

        assert exc_info.value.item_name == "Mystery"

    def test_unresolvable_restaurant(self) -> None:
        with pytest.raises(IncompleteCartItemError):
            sanitize_items([CartItem(menu_item_id=7, name="Margherita")])

    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            CartItem(menu_item_id=7, name="Margherita", quantity=0)


# =============================================================================
# CartStore
# =============================================================================


class TestLoad:
    """Tests for fetching the server cart."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_load(self, store: CartStore, server_cart: dict) -> None:
        respx.get(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json=server_cart)
        )

        cart = await store.load()

        assert cart.item_count == 2
        assert cart.subtotal == Decimal("24.00")
        assert cart.items[0].menu_item_id == 7

    @pytest.mark.asyncio
    @respx.mock
    async def test_load_failure_starts_empty(self, store: CartStore) -> None:
        respx.get(store.api.url("/api/cart")).mock(return_value=httpx.Response(500))

        cart = await store.load()

        assert cart.items == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_cart_starts_empty(self, store: CartStore) -> None:
        respx.get(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json={"items": [{"name": "x", "qty": 0}]})
        )

        cart = await store.load()

        assert cart == Cart.empty()

    @pytest.mark.asyncio
    @respx.mock
    async def test_load_without_token_makes_no_request(self, store: CartStore) -> None:
        store.api.session.logout()
        route = respx.get(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json={"items": []})
        )

        cart = await store.load()

        assert cart.items == []
        assert not route.called


class TestAdd:
    """Tests for adding menu items."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_add_new_item(self, store: CartStore, margherita: MenuItem) -> None:
        route = respx.put(store.api.url("/api/cart")).mock(side_effect=echo_cart)

        cart = await store.add(margherita)

        assert sent_items(route) == [
            {
                "menu_item_id": 7,
                "name": "Margherita",
                "price": 12.0,
                "qty": 1,
                "restaurantId": 1,
            }
        ]
        assert cart.item_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_add_existing_item_increments(
        self, store: CartStore, margherita: MenuItem, server_cart: dict
    ) -> None:
        respx.get(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json=server_cart)
        )
        route = respx.put(store.api.url("/api/cart")).mock(side_effect=echo_cart)
        await store.load()

        cart = await store.add(margherita)

        assert len(sent_items(route)) == 1
        assert sent_items(route)[0]["qty"] == 3
        assert cart.item_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_item_without_restaurant_uses_page_restaurant(
        self, store: CartStore
    ) -> None:
        route = respx.put(store.api.url("/api/cart")).mock(side_effect=echo_cart)
        item = MenuItem(id=8, name="Garlic Bread", price=Decimal("4.50"))

        await store.add(item)

        assert sent_items(route)[0]["restaurantId"] == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_restaurant_rejected_before_request(
        self, store: CartStore, server_cart: dict
    ) -> None:
        respx.get(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json=server_cart)
        )
        route = respx.put(store.api.url("/api/cart")).mock(side_effect=echo_cart)
        await store.load()
        sushi = MenuItem(id=50, name="Salmon Roll", price=Decimal("9.00"), restaurant_id=2)

        with pytest.raises(MixedRestaurantCartError) as exc_info:
            await store.add(sushi)

        assert exc_info.value.cart_restaurant_id == 1
        assert exc_info.value.item_restaurant_id == 2
        assert not route.called
        assert store.cart.item_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_item_without_id_rejected_before_request(self, store: CartStore) -> None:
        route = respx.put(store.api.url("/api/cart")).mock(side_effect=echo_cart)

        with pytest.raises(IncompleteCartItemError):
            await store.add(MenuItem(name="Special", price=Decimal("1.00"), restaurant_id=1))

        assert not route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_response_wins(self, store: CartStore, margherita: MenuItem) -> None:
        """Local state is whatever the server returned, not what was sent."""
        respx.put(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json={"items": []})
        )

        cart = await store.add(margherita)

        assert cart.items == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_failed_update_leaves_cart_unchanged(
        self, store: CartStore, margherita: MenuItem
    ) -> None:
        respx.put(store.api.url("/api/cart")).mock(return_value=httpx.Response(500))

        with pytest.raises(APIError):
            await store.add(margherita)

        assert store.cart.items == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_update_response_leaves_cart_unchanged(
        self, store: CartStore, margherita: MenuItem
    ) -> None:
        respx.put(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json={"items": "not a list"})
        )

        with pytest.raises(APIError, match="Unexpected response"):
            await store.add(margherita)

        assert store.cart.items == []


class TestUpdate:
    """Tests for quantity changes, removal and address."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_set_quantity_replaces(
        self, store: CartStore, server_cart: dict, margherita_line: CartItem
    ) -> None:
        store.cart = Cart.model_validate(server_cart)
        route = respx.put(store.api.url("/api/cart")).mock(side_effect=echo_cart)

        cart = await store.set_item_quantity(margherita_line, 5)

        assert sent_items(route)[0]["qty"] == 5
        assert cart.item_count == 5

    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize("quantity", [0, -1])
    async def test_non_positive_quantity_removes(
        self,
        store: CartStore,
        server_cart: dict,
        margherita_line: CartItem,
        quantity: int,
    ) -> None:
        store.cart = Cart.model_validate(server_cart)
        route = respx.put(store.api.url("/api/cart")).mock(side_effect=echo_cart)

        cart = await store.set_item_quantity(margherita_line, quantity)

        assert sent_items(route) == []
        assert cart.items == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_set_address_is_kept(self, store: CartStore) -> None:
        route = respx.put(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(200, json={"items": []})
        )

        cart = await store.set_address("12 MG Road")

        assert json.loads(route.calls.last.request.content)["address"] == "12 MG Road"
        assert cart.delivery_address == "12 MG Road"


class TestClear:
    """Tests for emptying the cart."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_clear_is_idempotent(self, store: CartStore, server_cart: dict) -> None:
        store.cart = Cart.model_validate(server_cart)
        route = respx.delete(store.api.url("/api/cart")).mock(
            return_value=httpx.Response(204)
        )

        await store.clear()
        cart = await store.clear()

        assert route.call_count == 2
        assert cart.items == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_clear_failure_keeps_cart(self, store: CartStore, server_cart: dict) -> None:
        store.cart = Cart.model_validate(server_cart)
        respx.delete(store.api.url("/api/cart")).mock(return_value=httpx.Response(500))

        with pytest.raises(APIError):
            await store.clear()

        assert store.cart.item_count == 2


"""
Pytest configuration for the ordering client tests.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from foodly_schemas import (
    CartItem,
    LoginResult,
    MenuItem,
    Order,
    OrderStatus,
    UserRole,
)

from apps.web.ordering.api import BackendClient
from apps.web.ordering.session import SessionContext

BASE_URL = "https://api.foodly.test"


@pytest.fixture
def session() -> SessionContext:
    """A customer session that is already logged in."""
    session = SessionContext()
    session.login(
        LoginResult(token="customer-token-abc", id=42),
        UserRole.CUSTOMER,
        username="asha",
    )
    return session


@pytest.fixture
def api(session: SessionContext) -> BackendClient:
    """Backend client pointed at the mocked test host."""
    return BackendClient(session, base_url=BASE_URL)


@pytest.fixture
def margherita() -> MenuItem:
    """A menu item from restaurant 1."""
    return MenuItem(id=7, name="Margherita", price=Decimal("12.00"), restaurant_id=1)


@pytest.fixture
def margherita_line() -> CartItem:
    """Two Margheritas, as the server returns them."""
    return CartItem(
        menu_item_id=7,
        name="Margherita",
        unit_price=Decimal("12.00"),
        quantity=2,
        restaurant_id=1,
    )


@pytest.fixture
def make_order():
    """Factory for orders created on a given day of January 2025."""

    def _make(
        order_id: int,
        status: OrderStatus | str = OrderStatus.NEW,
        created_day: int = 1,
        restaurant_id: int | None = 1,
    ) -> Order:
        return Order(
            id=order_id,
            customer_id=42,
            restaurant_id=restaurant_id,
            status=status,
            total=Decimal("20.00"),
            created_at=datetime(2025, 1, created_day, 12, 0, tzinfo=UTC),
        )

    return _make

"""Order schemas - created orders, their lines and lifecycle status."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import Field

from foodly_schemas.common import Money, WireModel


class OrderStatus(str, Enum):
    """Order lifecycle status, in forward order."""

    NEW = "New"
    ACCEPTED = "Accepted"
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def _missing_(cls, value: object) -> "OrderStatus | None":
        # The backend creates orders as "NEW" and some screens say "Canceled"
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower().replace("_", " ")
        if normalized == "canceled":
            normalized = "cancelled"
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None


class PaymentMethod(str, Enum):
    """Payment options offered at checkout."""

    CASH_ON_DELIVERY = "Cash on Delivery"
    CARD = "Credit/Debit Card"
    UPI = "UPI"


class OrderLineItem(WireModel):
    """Snapshot of a cart line taken when the order was created."""

    id: int | None = None
    menu_item_id: int | None = Field(default=None, alias="menuItemId")
    name: str = ""
    unit_price: Money = Field(default=Decimal("0.00"), alias="price")
    quantity: int = 1


class Order(WireModel):
    """An order as reported by the backend."""

    id: int
    customer_id: int | None = Field(default=None, alias="userId")
    restaurant_id: int | None = Field(default=None, alias="restaurantId")
    restaurant_name: str = Field(default="", alias="restaurant")
    items: list[OrderLineItem] = Field(default_factory=list)
    total: Money = Decimal("0.00")
    # Unknown status strings are kept as-is rather than rejected
    status: OrderStatus | str = Field(
        default=OrderStatus.NEW, union_mode="left_to_right"
    )
    # The backend sometimes sends an epoch number here
    created_at: datetime | None = Field(default=None, alias="createdAt")


class OrderRequest(WireModel):
    """Body of POST /api/orders."""

    items: list[dict]
    address: str
    coupon: str = ""
    payment: PaymentMethod
    discount: Money
    total: Money


class PriceQuote(WireModel):
    """Checkout totals computed on the client before submission."""

    subtotal: Money
    discount: Money
    delivery_fee: Money
    total: Money

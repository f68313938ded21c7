"""Public catalog schemas - restaurants and their menus."""

from decimal import Decimal

from pydantic import Field

from foodly_schemas.common import Money, WireModel


class Restaurant(WireModel):
    """A restaurant as listed by the public catalog."""

    id: int
    name: str
    slug: str | None = None
    address: str = ""
    cuisine_type: str = Field(default="", alias="cuisineType")
    is_active: bool = Field(default=True, alias="isActive")


class MenuItem(WireModel):
    """A dish on a restaurant's menu."""

    id: int | None = None
    name: str
    price: Money = Decimal("0.00")
    category: str = ""
    restaurant_id: int | None = Field(default=None, alias="restaurantId")
    is_available: bool = Field(default=True, alias="isAvailable")

"""Review schemas - customer reviews of delivered orders."""

from datetime import datetime

from pydantic import AliasChoices, Field

from foodly_schemas.common import WireModel


class Review(WireModel):
    """A review as listed by the backend."""

    id: int | None = None
    order_id: int | None = Field(default=None, alias="orderId")
    restaurant_id: int | None = Field(default=None, alias="restaurantId")
    menu_item_id: int | None = Field(default=None, alias="menuItemId")
    rating: int
    text: str = ""
    item_name: str | None = Field(
        default=None, validation_alias=AliasChoices("itemName", "menuItemName")
    )
    restaurant_name: str | None = Field(default=None, alias="restaurantName")
    customer_name: str | None = Field(default=None, alias="customerName")
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("timestamp", "createdAt")
    )


class ReviewRequest(WireModel):
    """Body of POST /api/reviews."""

    order_id: int = Field(alias="orderId")
    restaurant_id: int = Field(alias="restaurantId")
    menu_item_id: int = Field(alias="menuItemId")
    rating: int = Field(ge=1, le=5)
    text: str

"""Favorites (wishlist) schemas."""

from enum import Enum

from pydantic import Field

from foodly_schemas.common import WireModel


class FavoriteType(str, Enum):
    """What a wishlist entry points at."""

    RESTAURANT = "RESTAURANT"
    DISH = "DISH"


class FavoriteResult(str, Enum):
    """Outcome of adding a favorite."""

    ADDED = "added"
    ALREADY_FAVORITED = "already_favorited"


class Favorite(WireModel):
    """A wishlist entry."""

    id: int | None = None
    type: FavoriteType
    name: str
    restaurant: str = ""
    restaurant_id: int | None = Field(default=None, alias="restaurantId")
    menu_item_id: int | None = Field(default=None, alias="menuItemId")

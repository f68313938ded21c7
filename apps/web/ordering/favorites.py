"""Favorites (wishlist) - a duplicate add is a soft outcome, not an error."""

import logging

from foodly_schemas import Favorite, FavoriteResult, FavoriteType, MenuItem, Restaurant

from apps.web.ordering.api import BackendClient, parse_list
from apps.web.ordering.exceptions import ConflictError

logger = logging.getLogger(__name__)

ALREADY_FAVORITED_MESSAGE = "Already in favorites"


class FavoritesClient:
    """Adds and lists the customer's wishlist entries."""

    def __init__(self, api: BackendClient) -> None:
        self.api = api

    def _path(self) -> str:
        user = self.api.session.require_user()
        return f"/api/customers/{user.user_id}/wishlist"

    async def list_favorites(self) -> list[Favorite]:
        path = self._path()
        return parse_list(Favorite, await self.api.get(path), path)

    async def add_restaurant(self, restaurant: Restaurant) -> FavoriteResult:
        return await self._add(
            Favorite(
                type=FavoriteType.RESTAURANT,
                name=restaurant.name,
                restaurant=restaurant.name,
                restaurant_id=restaurant.id,
            )
        )

    async def add_dish(self, restaurant: Restaurant, item: MenuItem) -> FavoriteResult:
        return await self._add(
            Favorite(
                type=FavoriteType.DISH,
                name=item.name,
                restaurant=restaurant.name,
                restaurant_id=restaurant.id,
                menu_item_id=item.id,
            )
        )

    async def _add(self, favorite: Favorite) -> FavoriteResult:
        try:
            await self.api.post(self._path(), json=favorite.to_wire())
        except ConflictError:
            logger.debug("%s '%s' already favorited", favorite.type.value, favorite.name)
            return FavoriteResult.ALREADY_FAVORITED
        return FavoriteResult.ADDED

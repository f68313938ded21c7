"""Public restaurant and menu reads (no authentication)."""

from foodly_schemas import MenuItem, Restaurant

from apps.web.ordering.api import BackendClient, parse_list, parse_model

RESTAURANTS_PATH = "/api/restaurants"


class CatalogClient:
    """Read-only access to restaurants and menus."""

    def __init__(self, api: BackendClient) -> None:
        self.api = api

    async def list_restaurants(self) -> list[Restaurant]:
        data = await self.api.get(RESTAURANTS_PATH, public=True)
        return parse_list(Restaurant, data, RESTAURANTS_PATH)

    async def get_restaurant_by_slug(self, slug: str) -> Restaurant:
        path = f"{RESTAURANTS_PATH}/slug/{slug}"
        return parse_model(Restaurant, await self.api.get(path, public=True), path)

    async def get_menu(self, restaurant_id: int) -> list[MenuItem]:
        """Menu items, stamped with the restaurant they were fetched for."""
        path = f"{RESTAURANTS_PATH}/{restaurant_id}/menu"
        items = parse_list(MenuItem, await self.api.get(path, public=True), path)
        return [
            item
            if item.restaurant_id is not None
            else item.model_copy(update={"restaurant_id": restaurant_id})
            for item in items
        ]

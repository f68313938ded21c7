"""Review client - submitting and listing reviews."""

import logging

from foodly_schemas import Review, ReviewRequest

from apps.web.ordering.api import BackendClient, parse_list, parse_model

logger = logging.getLogger(__name__)

REVIEWS_PATH = "/api/reviews"


class ReviewClient:
    """Customer and restaurant access to reviews."""

    def __init__(self, api: BackendClient) -> None:
        self.api = api

    async def submit(
        self,
        order_id: int,
        restaurant_id: int,
        menu_item_id: int,
        rating: int,
        text: str,
    ) -> Review | None:
        """
        Review one dish of a delivered order.

        Raises:
            pydantic.ValidationError: Rating outside 1..5 (no request sent).
        """
        request = ReviewRequest(
            order_id=order_id,
            restaurant_id=restaurant_id,
            menu_item_id=menu_item_id,
            rating=rating,
            text=text,
        )
        data = await self.api.post(REVIEWS_PATH, json=request.to_wire())
        logger.info("Review submitted for order %s item %s", order_id, menu_item_id)
        return parse_model(Review, data, REVIEWS_PATH) if data else None

    async def list_mine(self) -> list[Review]:
        path = f"{REVIEWS_PATH}/my"
        return parse_list(Review, await self.api.get(path), path)

    async def list_for_restaurant(self, restaurant_id: int) -> list[Review]:
        path = f"{REVIEWS_PATH}/restaurant/{restaurant_id}"
        return parse_list(Review, await self.api.get(path), path)

"""
Reconciled views - local snapshots of server state kept fresh by pollers.

Each view keeps the last good snapshot plus a visible error for the last
failed fetch. A failed fetch never clears the snapshot.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from foodly_schemas import Order, OrderStatus, Review

from apps.web.config import settings
from apps.web.ordering import status
from apps.web.ordering.exceptions import OrderingError
from apps.web.ordering.orders import OrderClient
from apps.web.ordering.poller import Poller
from apps.web.ordering.review_gate import ReviewGate
from apps.web.ordering.reviews import ReviewClient

logger = logging.getLogger(__name__)

ReviewPromptHandler = Callable[[Order], None]
StatusChangeHandler = Callable[[Order, Order], None]


class ReconciledView:
    """Base for views refreshed by a Poller."""

    default_interval: float = 5.0

    def __init__(self, key: str, interval: float | None = None) -> None:
        self.key = key
        self.interval = interval or self.default_interval
        self.error: str | None = None
        self.refreshed_at: datetime | None = None
        self._poller: Poller | None = None

    async def refresh(self) -> None:
        """Fetch once and reconcile; records and re-raises failures."""
        try:
            await self._reconcile()
        except OrderingError as e:
            self.error = e.message
            raise
        self.error = None
        self.refreshed_at = datetime.now(UTC)

    async def _reconcile(self) -> None:
        raise NotImplementedError

    def watch(self) -> Poller:
        """Start polling; call close() when the view goes away."""
        if self._poller is None:
            self._poller = Poller(self.key, self.refresh, self.interval)
        self._poller.start()
        return self._poller

    def close(self) -> None:
        if self._poller is not None:
            self._poller.stop()

    @property
    def poller(self) -> Poller | None:
        return self._poller


class OrderListView(ReconciledView):
    """
    An actor's order list, sorted active-first then newest-first.

    With a review gate attached (customer lists), each refresh offers at
    most one review prompt for a newly delivered order.
    """

    default_interval = settings.ORDER_POLL_INTERVAL

    def __init__(
        self,
        key: str,
        fetch: Callable[[], Awaitable[list[Order]]],
        review_gate: ReviewGate | None = None,
        reviews: ReviewClient | None = None,
        on_review_prompt: ReviewPromptHandler | None = None,
        interval: float | None = None,
    ) -> None:
        super().__init__(key, interval)
        self.fetch = fetch
        self.review_gate = review_gate
        self.reviews = reviews
        self.on_review_prompt = on_review_prompt
        self.orders: list[Order] = []

    @classmethod
    def for_customer(
        cls,
        orders: OrderClient,
        review_gate: ReviewGate | None = None,
        reviews: ReviewClient | None = None,
        on_review_prompt: ReviewPromptHandler | None = None,
    ) -> "OrderListView":
        return cls(
            "orders:mine",
            orders.list_mine,
            review_gate=review_gate,
            reviews=reviews,
            on_review_prompt=on_review_prompt,
        )

    @classmethod
    def for_restaurant(cls, orders: OrderClient, restaurant_id: int) -> "OrderListView":
        return cls(
            f"orders:restaurant:{restaurant_id}",
            lambda: orders.list_for_restaurant(restaurant_id),
        )

    @classmethod
    def for_admin(cls, orders: OrderClient) -> "OrderListView":
        return cls("orders:all", orders.list_all)

    @property
    def active_orders(self) -> list[Order]:
        return [o for o in self.orders if status.is_active(o.status)]

    async def _reconcile(self) -> None:
        fetched = await self.fetch()
        self.orders = status.sort_orders(fetched)
        if self.review_gate is not None:
            await self._offer_review_prompt(fetched)

    async def _offer_review_prompt(self, orders: list[Order]) -> None:
        gate = self.review_gate
        if gate is None or gate.showing is not None:
            return
        candidates = [
            o
            for o in orders
            if status.parse(o.status) == OrderStatus.DELIVERED
            and not gate.has_prompted(o.id)
        ]
        if not candidates:
            return
        if self.reviews is not None:
            # The server's review list wins over a missing local flag
            try:
                gate.reconcile(await self.reviews.list_mine())
            except OrderingError as e:
                logger.warning("Could not reconcile review gate: %s", e)
        order = gate.next_prompt(orders)
        if order is not None and self.on_review_prompt is not None:
            self.on_review_prompt(order)


class OrderTracker(ReconciledView):
    """
    A single order's live status.

    Responses that would move the status backwards (a stale poll overtaking
    a newer update) are dropped.
    """

    default_interval = settings.ORDER_TRACK_INTERVAL

    def __init__(
        self,
        orders: OrderClient,
        order_id: int,
        review_gate: ReviewGate | None = None,
        on_status_change: StatusChangeHandler | None = None,
        on_review_prompt: ReviewPromptHandler | None = None,
        interval: float | None = None,
    ) -> None:
        super().__init__(f"order:{order_id}", interval)
        self.orders = orders
        self.order_id = order_id
        self.review_gate = review_gate
        self.on_status_change = on_status_change
        self.on_review_prompt = on_review_prompt
        self.order: Order | None = None

    @property
    def next_status(self) -> OrderStatus | None:
        return status.next_status(self.order.status) if self.order else None

    @property
    def can_cancel(self) -> bool:
        return self.order is not None and status.can_cancel(self.order.status)

    async def _reconcile(self) -> None:
        self.apply(await self.orders.get(self.order_id))

    async def _current(self) -> Order:
        if self.order is None:
            self.apply(await self.orders.get(self.order_id))
        return self.order  # type: ignore[return-value]

    def apply(self, order: Order) -> bool:
        """
        Adopt a fresh snapshot (from a poll or a mutation response).

        Returns:
            False if the snapshot was dropped as a regression.
        """
        previous = self.order
        if previous is not None and status.is_regression(previous.status, order.status):
            logger.debug(
                "Order %s: ignoring stale status %s (have %s)",
                self.order_id,
                status.label(order.status),
                status.label(previous.status),
            )
            return False

        self.order = order
        if previous is not None and previous.status != order.status:
            logger.info(
                "Order %s status %s -> %s",
                self.order_id,
                status.label(previous.status),
                status.label(order.status),
            )
            if self.on_status_change is not None:
                self.on_status_change(previous, order)

        if self.review_gate is not None:
            prompt = self.review_gate.next_prompt([order])
            if prompt is not None and self.on_review_prompt is not None:
                self.on_review_prompt(prompt)
        return True

    async def advance(self) -> Order | None:
        """Request the next forward status and adopt the response."""
        updated = await self.orders.advance(await self._current())
        if updated is not None:
            self.apply(updated)
        return self.order

    async def cancel(self) -> Order | None:
        updated = await self.orders.cancel(await self._current())
        if updated is not None:
            self.apply(updated)
        return self.order


class ReviewListView(ReconciledView):
    """A restaurant's reviews, newest first as the backend returns them."""

    default_interval = settings.REVIEW_POLL_INTERVAL

    def __init__(
        self, reviews: ReviewClient, restaurant_id: int, interval: float | None = None
    ) -> None:
        super().__init__(f"reviews:restaurant:{restaurant_id}", interval)
        self.client = reviews
        self.restaurant_id = restaurant_id
        self.reviews: list[Review] = []

    @property
    def average_rating(self) -> float | None:
        if not self.reviews:
            return None
        return sum(r.rating for r in self.reviews) / len(self.reviews)

    async def _reconcile(self) -> None:
        self.reviews = await self.client.list_for_restaurant(self.restaurant_id)

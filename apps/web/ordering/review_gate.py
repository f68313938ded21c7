"""
Review gate - prompt for a review exactly once per delivered order.

The "already prompted" flag is only recorded when the customer dismisses or
completes the prompt, so reloading before that shows the same prompt again.
Flags persist client-side and are reconciled against the backend's review
list, so reviewing on another device also closes the gate here.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from foodly_schemas import Order, OrderStatus, Review

from apps.web.config import settings
from apps.web.ordering import status

logger = logging.getLogger(__name__)


class ReviewGateStore(Protocol):
    """Persistence for per-customer "review prompt shown" flags."""

    def load(self, customer_id: int) -> set[int]:
        """Order ids already prompted for this customer."""
        ...

    def save(self, customer_id: int, order_ids: set[int]) -> None:
        ...


class InMemoryReviewStore:
    """Store for tests and sessions that should not touch disk."""

    def __init__(self) -> None:
        self._data: dict[int, set[int]] = {}

    def load(self, customer_id: int) -> set[int]:
        return set(self._data.get(customer_id, set()))

    def save(self, customer_id: int, order_ids: set[int]) -> None:
        self._data[customer_id] = set(order_ids)


class JSONFileReviewStore:
    """
    Flags kept in a small JSON file: {"<customer_id>": [order ids...]}.

    A missing or unreadable file counts as "nothing prompted yet".
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path or settings.REVIEW_GATE_PATH)

    def _read(self) -> dict[str, list[int]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable review gate file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, customer_id: int) -> set[int]:
        return {int(order_id) for order_id in self._read().get(str(customer_id), [])}

    def save(self, customer_id: int, order_ids: set[int]) -> None:
        data = self._read()
        data[str(customer_id)] = sorted(order_ids)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))


class ReviewGate:
    """
    Decides when a delivered order should trigger the review prompt.

    Only one prompt is shown at a time. While it is open, next_prompt()
    returns None; the next unreviewed delivery is picked up on a later poll
    cycle after the current prompt is dismissed or completed.
    """

    def __init__(self, customer_id: int, store: ReviewGateStore) -> None:
        self.customer_id = customer_id
        self.store = store
        self._prompted = store.load(customer_id)
        self.showing: Order | None = None

    def has_prompted(self, order_id: int) -> bool:
        return order_id in self._prompted

    def mark_prompted(self, order_id: int) -> None:
        """Record the flag. Idempotent."""
        if order_id in self._prompted:
            return
        self._prompted.add(order_id)
        self.store.save(self.customer_id, self._prompted)
        logger.debug("Review prompt recorded for order %s", order_id)

    def reconcile(self, reviews: Iterable[Review]) -> int:
        """
        Treat orders the backend already has reviews for as prompted.

        Returns:
            Number of flags added.
        """
        reviewed = {r.order_id for r in reviews if r.order_id is not None}
        missing = reviewed - self._prompted
        if missing:
            self._prompted |= missing
            self.store.save(self.customer_id, self._prompted)
            logger.info(
                "Review gate reconciled %d order(s) reviewed elsewhere", len(missing)
            )
        return len(missing)

    def next_prompt(self, orders: Iterable[Order]) -> Order | None:
        """
        The first delivered order (in list order) still owed a prompt.

        Marks it as showing; returns None while another prompt is open.
        """
        if self.showing is not None:
            return None
        for order in orders:
            if status.parse(order.status) == OrderStatus.DELIVERED and not self.has_prompted(
                order.id
            ):
                self.showing = order
                logger.info("Review prompt for delivered order %s", order.id)
                return order
        return None

    def dismiss(self) -> None:
        """The customer closed the prompt without reviewing."""
        self._close()

    def complete(self) -> None:
        """The customer submitted the review."""
        self._close()

    def _close(self) -> None:
        if self.showing is None:
            return
        self.mark_prompted(self.showing.id)
        self.showing = None

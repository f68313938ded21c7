"""Ordering client - cart staging, order lifecycle sync, chat and review prompts."""

from apps.web.ordering.api import BackendClient
from apps.web.ordering.auth import AuthClient
from apps.web.ordering.cart import CartStore
from apps.web.ordering.catalog import CatalogClient
from apps.web.ordering.chat import ChatThread, RestaurantInbox
from apps.web.ordering.favorites import FavoritesClient
from apps.web.ordering.orders import OrderClient
from apps.web.ordering.poller import Poller
from apps.web.ordering.review_gate import (
    InMemoryReviewStore,
    JSONFileReviewStore,
    ReviewGate,
)
from apps.web.ordering.reviews import ReviewClient
from apps.web.ordering.services import checkout
from apps.web.ordering.session import SessionContext
from apps.web.ordering.tracking import OrderListView, OrderTracker, ReviewListView

__all__ = [
    "AuthClient",
    "BackendClient",
    "CartStore",
    "CatalogClient",
    "ChatThread",
    "FavoritesClient",
    "InMemoryReviewStore",
    "JSONFileReviewStore",
    "OrderClient",
    "OrderListView",
    "OrderTracker",
    "Poller",
    "ReviewClient",
    "ReviewGate",
    "RestaurantInbox",
    "ReviewListView",
    "SessionContext",
    "checkout",
]

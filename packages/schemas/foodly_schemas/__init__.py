"""Foodly Schemas - Pydantic models for the ordering backend's data contracts."""

from foodly_schemas.auth import CurrentUser, LoginResult, SignupRequest, UserRole
from foodly_schemas.cart import Cart, CartItem
from foodly_schemas.catalog import MenuItem, Restaurant
from foodly_schemas.chat import ChatMessage, ChatSender
from foodly_schemas.common import Money, WireModel
from foodly_schemas.favorites import Favorite, FavoriteResult, FavoriteType
from foodly_schemas.orders import (
    Order,
    OrderLineItem,
    OrderRequest,
    OrderStatus,
    PaymentMethod,
    PriceQuote,
)
from foodly_schemas.reviews import Review, ReviewRequest

__all__ = [
    # Common
    "Money",
    "WireModel",
    # Auth
    "CurrentUser",
    "LoginResult",
    "SignupRequest",
    "UserRole",
    # Catalog
    "MenuItem",
    "Restaurant",
    # Cart
    "Cart",
    "CartItem",
    # Orders
    "Order",
    "OrderLineItem",
    "OrderRequest",
    "OrderStatus",
    "PaymentMethod",
    "PriceQuote",
    # Chat
    "ChatMessage",
    "ChatSender",
    # Reviews
    "Review",
    "ReviewRequest",
    # Favorites
    "Favorite",
    "FavoriteResult",
    "FavoriteType",
]

"""Support chat schemas - per-order messages between customer and restaurant."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from foodly_schemas.common import WireModel


class ChatSender(str, Enum):
    """Who wrote a chat message."""

    CUSTOMER = "customer"
    RESTAURANT = "restaurant"


class ChatMessage(WireModel):
    """A single message in an order's chat thread."""

    id: int | None = None
    order_id: int = Field(alias="orderId")
    restaurant_id: int = Field(alias="restaurantId")
    customer_id: int = Field(alias="customerId")
    sender: ChatSender
    text: str = Field(alias="message")
    sent_at: datetime | None = Field(default=None, alias="timestamp")
    is_read: bool = Field(default=False, alias="isRead")

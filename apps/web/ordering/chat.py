"""
Per-order chat between a customer and the restaurant.

A thread is keyed by (order id, restaurant id, customer id). Sent messages
are appended as the server returns them, and every poll replaces the local
list wholesale with the server's thread. Restaurants read all of their
threads at once through RestaurantInbox.
"""

import logging

from foodly_schemas import ChatMessage, ChatSender, Order

from apps.web.config import settings
from apps.web.ordering import status
from apps.web.ordering.api import BackendClient, parse_list, parse_model
from apps.web.ordering.exceptions import ChatUnavailableError, OrderingError
from apps.web.ordering.poller import Poller
from apps.web.ordering.tracking import ReconciledView

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/api/support/messages"


class ChatThread:
    """Message list for one order, reconciled by polling."""

    def __init__(
        self,
        api: BackendClient,
        order_id: int,
        restaurant_id: int | None,
        customer_id: int | None,
    ) -> None:
        if restaurant_id is None or customer_id is None:
            raise ChatUnavailableError(
                f"Chat for order {order_id} needs both restaurant and customer ids"
            )
        self.api = api
        self.order_id = order_id
        self.restaurant_id = restaurant_id
        self.customer_id = customer_id
        self.messages: list[ChatMessage] = []
        self.error: str | None = None
        self._poller: Poller | None = None

    @classmethod
    def for_order(
        cls, api: BackendClient, order: Order, customer_id: int | None = None
    ) -> "ChatThread":
        """
        Open the thread for an order once its restaurant id is known.

        Raises:
            ChatUnavailableError: Restaurant id not resolved yet, or the
                order is Delivered/Cancelled (the backend closes chat then).
        """
        if order.restaurant_id is None:
            raise ChatUnavailableError(f"Order {order.id} has no restaurant yet")
        if status.is_terminal(order.status):
            raise ChatUnavailableError(
                f"Chat is disabled for delivered or cancelled order {order.id}"
            )
        return cls(
            api,
            order.id,
            order.restaurant_id,
            customer_id if customer_id is not None else order.customer_id,
        )

    @property
    def key(self) -> str:
        return f"chat:{self.order_id}:{self.restaurant_id}:{self.customer_id}"

    async def send(self, sender: ChatSender, text: str) -> ChatMessage:
        """Post a message and append the server's copy of it."""
        if not text.strip():
            raise ChatUnavailableError("Cannot send an empty message")
        data = await self.api.post(
            MESSAGES_PATH,
            json={
                "orderId": self.order_id,
                "restaurantId": self.restaurant_id,
                "customerId": self.customer_id,
                "sender": sender.value,
                "message": text,
            },
        )
        message = parse_model(ChatMessage, data, MESSAGES_PATH)
        self.messages.append(message)
        return message

    async def poll(self) -> list[ChatMessage]:
        """Replace the local thread with the server's."""
        try:
            data = await self.api.get(
                MESSAGES_PATH,
                params={
                    "orderId": self.order_id,
                    "customerId": self.customer_id,
                    "restaurantId": self.restaurant_id,
                },
            )
            self.messages = parse_list(ChatMessage, data, MESSAGES_PATH)
        except OrderingError as e:
            self.error = e.message
            raise
        self.error = None
        return self.messages

    def watch(self, interval: float | None = None) -> Poller:
        """Start polling the thread (every CHAT_POLL_INTERVAL by default)."""
        if self._poller is None:
            self._poller = Poller(
                self.key, self.poll, interval or settings.CHAT_POLL_INTERVAL
            )
        self._poller.start()
        return self._poller

    def close(self) -> None:
        if self._poller is not None:
            self._poller.stop()


class RestaurantInbox(ReconciledView):
    """
    Every support message addressed to one restaurant, grouped into threads.

    Threads are keyed by (order id, customer id) and keep the backend's
    timestamp order. Replies go through a ChatThread for the same triple.
    """

    default_interval = settings.SUPPORT_INBOX_POLL_INTERVAL

    def __init__(
        self, api: BackendClient, restaurant_id: int, interval: float | None = None
    ) -> None:
        super().__init__(f"support:restaurant:{restaurant_id}", interval)
        self.api = api
        self.restaurant_id = restaurant_id
        self.messages: list[ChatMessage] = []

    @property
    def threads(self) -> dict[tuple[int, int], list[ChatMessage]]:
        grouped: dict[tuple[int, int], list[ChatMessage]] = {}
        for message in self.messages:
            grouped.setdefault((message.order_id, message.customer_id), []).append(message)
        return grouped

    @property
    def unread_count(self) -> int:
        """Customer messages the restaurant has not read yet."""
        return sum(
            1
            for m in self.messages
            if m.sender == ChatSender.CUSTOMER and not m.is_read
        )

    def thread(self, order_id: int, customer_id: int) -> ChatThread:
        """A reply thread seeded with the inbox's messages for it."""
        chat = ChatThread(self.api, order_id, self.restaurant_id, customer_id)
        chat.messages = list(self.threads.get((order_id, customer_id), []))
        return chat

    async def reply(self, order_id: int, customer_id: int, text: str) -> ChatMessage:
        message = await self.thread(order_id, customer_id).send(ChatSender.RESTAURANT, text)
        self.messages.append(message)
        return message

    async def _reconcile(self) -> None:
        path = f"{MESSAGES_PATH}/restaurant/{self.restaurant_id}"
        self.messages = parse_list(ChatMessage, await self.api.get(path), path)

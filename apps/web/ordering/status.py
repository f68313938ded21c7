"""
Order status machine - pure functions, no I/O.

New -> Accepted -> Preparing -> Out for Delivery -> Delivered
New -> Cancelled

Status never regresses; the only branch out of the forward chain is a
cancellation while the order is still New.
"""

from datetime import UTC, datetime

from foodly_schemas import Order, OrderStatus

_NEXT: dict[OrderStatus, OrderStatus | None] = {
    OrderStatus.NEW: OrderStatus.ACCEPTED,
    OrderStatus.ACCEPTED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.OUT_FOR_DELIVERY: OrderStatus.DELIVERED,
    OrderStatus.DELIVERED: None,
}

_RANK: dict[OrderStatus, int] = {
    OrderStatus.NEW: 0,
    OrderStatus.ACCEPTED: 1,
    OrderStatus.PREPARING: 2,
    OrderStatus.OUT_FOR_DELIVERY: 3,
    OrderStatus.DELIVERED: 4,
    OrderStatus.CANCELLED: 5,
}

# Statuses the backend invents sort after everything we know
UNKNOWN_RANK = len(_RANK)

TERMINAL = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

_EPOCH = datetime.fromtimestamp(0, UTC)


def parse(status: OrderStatus | str | None) -> OrderStatus | None:
    """Coerce a raw status into the enum, or None if unrecognised."""
    if isinstance(status, OrderStatus):
        return status
    if status is None:
        return None
    try:
        return OrderStatus(status)
    except ValueError:
        return None


def next_status(current: OrderStatus | str | None) -> OrderStatus | None:
    """The next forward status, or None when no further action is offered."""
    status = parse(current)
    if status is None:
        return None
    return _NEXT.get(status)


def can_cancel(current: OrderStatus | str | None) -> bool:
    return parse(current) == OrderStatus.NEW


def is_terminal(status: OrderStatus | str | None) -> bool:
    return parse(status) in TERMINAL


def is_active(status: OrderStatus | str | None) -> bool:
    parsed = parse(status)
    return parsed is not None and parsed not in TERMINAL


def allowed_transitions(current: OrderStatus | str | None) -> list[OrderStatus]:
    """Statuses a restaurant or admin may request from here."""
    options: list[OrderStatus] = []
    forward = next_status(current)
    if forward is not None:
        options.append(forward)
    if can_cancel(current):
        options.append(OrderStatus.CANCELLED)
    return options


def rank(status: OrderStatus | str | None) -> int:
    parsed = parse(status)
    if parsed is None:
        return UNKNOWN_RANK
    return _RANK[parsed]


def is_regression(
    old: OrderStatus | str | None, new: OrderStatus | str | None
) -> bool:
    """
    True if moving from old to new would go backwards.

    Cancelled only follows New, so anything after New that turns into
    Cancelled is treated as a regression as well, and nothing moves out of
    a terminal status.
    """
    old_status, new_status = parse(old), parse(new)
    if old_status is None or new_status is None or old_status == new_status:
        return False
    if old_status in TERMINAL:
        return True
    if new_status == OrderStatus.CANCELLED:
        return old_status != OrderStatus.NEW
    return _RANK[new_status] < _RANK[old_status]


def sort_key(order: Order) -> tuple[int, float, int]:
    """
    Active orders first (by forward rank), then Delivered, then Cancelled;
    newest first within a rank.
    """
    created = order.created_at
    if created is not None and created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    timestamp = (created or _EPOCH).timestamp()
    return (rank(order.status), -timestamp, -order.id)


def sort_orders(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=sort_key)


def label(value: OrderStatus | str | None) -> str:
    """Display text for a status, known or not."""
    if isinstance(value, OrderStatus):
        return value.value
    return "" if value is None else str(value)

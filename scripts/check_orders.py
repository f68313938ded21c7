#!/usr/bin/env python3
"""
Log in and print an actor's orders with the next status each one allows.

Usage:
    FOODLY_USERNAME=dhaba FOODLY_PASSWORD=... FOODLY_ROLE=RESTAURANT \\
        python scripts/check_orders.py

Talks to API_BASE_URL (see apps/web/config/settings.py).
"""

import asyncio
import logging
import os
import sys

from foodly_schemas import UserRole

from apps.web.ordering import AuthClient, BackendClient, OrderClient, SessionContext
from apps.web.ordering import status
from apps.web.ordering.exceptions import OrderingError


async def check_orders(username: str, password: str, role: UserRole) -> int:
    session = SessionContext()
    async with BackendClient(session) as api:
        print(f"1. Logging in as {username} ({role.value}) at {api.base_url}...")
        try:
            user = await AuthClient(api).login(username, password, role)
        except OrderingError as e:
            print(f"   ✗ FAILED: {e}")
            return 1
        print(f"   ✓ Logged in (user id {user.user_id})")

        print("2. Fetching orders...")
        orders = OrderClient(api)
        try:
            if role == UserRole.CUSTOMER:
                result = await orders.list_mine()
            elif role == UserRole.RESTAURANT:
                if user.restaurant_id is None:
                    print("   ✗ FAILED: login returned no restaurant id")
                    return 1
                result = await orders.list_for_restaurant(user.restaurant_id)
            else:
                result = await orders.list_all()
        except OrderingError as e:
            print(f"   ✗ FAILED: {e}")
            return 1

        print(f"   ✓ {len(result)} order(s)")
        for order in status.sort_orders(result):
            next_step = status.next_status(order.status)
            print(
                f"   #{order.id:<6} {status.label(order.status):<20} total={order.total} "
                f"restaurant={order.restaurant_id} "
                f"next={next_step.value if next_step else '-'}"
                f"{' (cancellable)' if status.can_cancel(order.status) else ''}"
            )
    return 0


def main() -> int:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "WARNING"))

    username = os.environ.get("FOODLY_USERNAME")
    password = os.environ.get("FOODLY_PASSWORD")
    if not username or not password:
        print("Set FOODLY_USERNAME and FOODLY_PASSWORD")
        return 2

    try:
        role = UserRole(os.environ.get("FOODLY_ROLE", "CUSTOMER").upper())
    except ValueError:
        print("FOODLY_ROLE must be CUSTOMER, RESTAURANT or ADMIN")
        return 2

    return asyncio.run(check_orders(username, password, role))


if __name__ == "__main__":
    sys.exit(main())

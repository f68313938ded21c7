"""
Synchronization poller - interval-driven re-fetch with single-flight ticks.

One Poller replaces each ad hoc "fetch every N seconds" loop (order lists,
order tracking, reviews, chat). A tick that finds the previous fetch still
in flight is skipped, so at most one request per poller is outstanding and
responses cannot arrive out of order.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from apps.web.ordering.exceptions import AuthenticationError, OrderingError

logger = logging.getLogger(__name__)

FetchFn = Callable[[], Awaitable[Any]]


class Poller:
    """
    Re-invokes a fetch function every `interval` seconds until stopped.

    Failure policy: a failed fetch is logged and the next tick retries, with
    no backoff. An AuthenticationError stops the poller, since the session
    has been cleared and every later tick would fail the same way.

    Usage:
        poller = Poller("orders:mine", view.refresh, interval=5.0)
        poller.start()
        ...
        poller.stop()  # when the view goes away
    """

    def __init__(self, key: str, fetch: FetchFn, interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self.key = key
        self.fetch = fetch
        self.interval = interval

        self.fetch_count = 0
        self.skipped_ticks = 0
        self.failure_count = 0

        self._loop_task: asyncio.Task | None = None
        self._inflight: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def start(self) -> None:
        """Fetch immediately, then every interval. Must be called inside a loop."""
        if self.running:
            return
        logger.info("Poller %s started (every %.1fs)", self.key, self.interval)
        self._loop_task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel the timer and any in-flight fetch. Safe to call twice."""
        current = asyncio.current_task()
        was_running = self.running
        if self._loop_task is not None and self._loop_task is not current:
            self._loop_task.cancel()
        if self._inflight is not None and self._inflight is not current:
            self._inflight.cancel()
        self._loop_task = None
        if was_running:
            logger.info("Poller %s stopped", self.key)

    def refresh(self) -> bool:
        """
        Trigger an out-of-band fetch.

        Returns:
            False if a fetch was already in flight and this one was skipped.
        """
        return self._tick()

    async def wait_idle(self) -> None:
        """Wait for the in-flight fetch (if any) to settle."""
        if self._inflight is not None and not self._inflight.done():
            await asyncio.wait({self._inflight})

    async def __aenter__(self) -> "Poller":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.stop()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _run(self) -> None:
        while True:
            self._tick()
            await asyncio.sleep(self.interval)

    def _tick(self) -> bool:
        if self.in_flight:
            self.skipped_ticks += 1
            logger.debug("Poller %s: previous fetch still running, tick skipped", self.key)
            return False
        self._inflight = asyncio.get_running_loop().create_task(self._fetch_once())
        return True

    async def _fetch_once(self) -> None:
        self.fetch_count += 1
        try:
            await self.fetch()
        except AuthenticationError as e:
            logger.warning("Poller %s stopping, session rejected: %s", self.key, e)
            self.stop()
        except OrderingError as e:
            self.failure_count += 1
            logger.warning("Poller %s fetch failed, retrying next tick: %s", self.key, e)
        except Exception as e:
            self.failure_count += 1
            logger.exception("Unexpected error in poller %s: %s", self.key, e)

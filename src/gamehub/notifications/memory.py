# src/gamehub/notifications/memory.py

"""In-process notifier holding the connections of this server."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Callable

from gamehub import config

from .base import Connection, ScoreUpdateEvent

logger = logging.getLogger(__name__)


class Subscription:
    """One registered connection and its outbound queue.

    Messages are queued without blocking and written by a dedicated sender
    task, so a slow client only ever delays its own messages.
    """

    def __init__(self, connection: Connection, max_pending: int) -> None:
        self.id = uuid.uuid4().hex
        self.connection = connection
        self.closed = False
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(
            maxsize=max_pending
        )
        self._task: asyncio.Task | None = None

    def start(self, on_failure: Callable[["Subscription"], None]) -> None:
        self._task = asyncio.get_running_loop().create_task(
            self._run(on_failure), name=f"subscription-{self.id}"
        )

    def offer(self, message: dict[str, Any]) -> bool:
        """Queue a message; False when the queue is full or closed."""
        if self.closed:
            return False
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            return False
        return True

    async def flush(self) -> None:
        """Wait until every queued message has been handed to the connection."""
        await self._queue.join()

    def cancel(self) -> None:
        self.closed = True
        self._drain()
        task = self._task
        if task is None or task.done() or task is asyncio.current_task():
            return
        task.cancel()

    async def _run(self, on_failure: Callable[["Subscription"], None]) -> None:
        while True:
            message = await self._queue.get()
            try:
                await self.connection.send_json(message)
            except Exception as e:
                logger.info(
                    "Dropping subscriber after failed send",
                    extra={"subscription_id": self.id, "error": str(e)},
                )
                self.closed = True
                self._drain()
                on_failure(self)
                return
            finally:
                self._queue.task_done()

    def _drain(self) -> None:
        # Discarded messages still count as done so flush() returns
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._queue.task_done()


class InMemoryNotifier:
    """Broadcasts events to the connections registered in this process."""

    def __init__(self, max_pending: int = config.NOTIFIER_MAX_PENDING) -> None:
        self._max_pending = max_pending
        self._subscriptions: dict[str, Subscription] = {}

    @property
    def subscriptions(self) -> list[Subscription]:
        return list(self._subscriptions.values())

    def subscribe(self, connection: Connection) -> Subscription:
        """Register a connection; must be called from the running event loop."""
        subscription = Subscription(connection, self._max_pending)
        subscription.start(on_failure=self.unsubscribe)
        self._subscriptions[subscription.id] = subscription
        logger.info(
            "Live subscriber connected",
            extra={
                "subscription_id": subscription.id,
                "subscribers": len(self._subscriptions),
            },
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        if self._subscriptions.pop(subscription.id, None) is None:
            return
        subscription.cancel()
        logger.info(
            "Live subscriber removed",
            extra={
                "subscription_id": subscription.id,
                "subscribers": len(self._subscriptions),
            },
        )

    async def publish(self, event: ScoreUpdateEvent) -> int:
        """Queue ``event`` for every ready subscriber without waiting on sends.

        Subscribers whose connection is no longer ready are dropped; those
        whose queue is full miss this event. Returns how many subscribers
        the event was queued for.
        """
        message = event.to_message()
        delivered = 0
        for subscription in self.subscriptions:
            if not subscription.connection.is_ready():
                self.unsubscribe(subscription)
                continue
            if subscription.offer(message):
                delivered += 1
            else:
                logger.warning(
                    "Skipping slow subscriber",
                    extra={"subscription_id": subscription.id},
                )
        logger.debug(
            "Score update broadcast",
            extra={"game_id": event.game_id.value, "delivered": delivered},
        )
        return delivered

    async def start(self) -> None:
        pass

    async def close(self) -> None:
        for subscription in self.subscriptions:
            self.unsubscribe(subscription)

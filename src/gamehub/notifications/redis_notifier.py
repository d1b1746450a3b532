# src/gamehub/notifications/redis_notifier.py

"""Redis pub/sub notifier for running several server processes.

Every process publishes to one channel and relays what it hears on that
channel to its own connections through an InMemoryNotifier.
"""

from __future__ import annotations

import asyncio
import logging

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from gamehub import config

from .base import Connection, ScoreUpdateEvent
from .memory import InMemoryNotifier, Subscription

logger = logging.getLogger(__name__)


class RedisNotifier:
    def __init__(
        self,
        client: aioredis.Redis,
        channel: str = config.NOTIFIER_CHANNEL,
        local: InMemoryNotifier | None = None,
        retry_delay: float = 0.5,
        max_retry_delay: float = 30.0,
    ) -> None:
        self._client = client
        self._channel = channel
        self._local = local or InMemoryNotifier()
        self._pubsub = None
        self._listener: asyncio.Task | None = None
        self._retry_delay = retry_delay
        self._max_retry_delay = max_retry_delay

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisNotifier":
        return cls(aioredis.Redis.from_url(url, decode_responses=True), **kwargs)

    @property
    def local(self) -> InMemoryNotifier:
        return self._local

    def subscribe(self, connection: Connection) -> Subscription:
        return self._local.subscribe(connection)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._local.unsubscribe(subscription)

    async def publish(self, event: ScoreUpdateEvent) -> int:
        """Publish to the channel; returns the number of listening processes."""
        receivers = await self._client.publish(self._channel, event.to_json())
        return int(receivers)

    async def relay(self, data: str | bytes) -> int:
        """Forward one channel payload to this process's subscribers."""
        try:
            event = ScoreUpdateEvent.from_json(data)
        except ValueError as e:
            logger.warning(
                "Ignoring malformed notifier message",
                extra={"channel": self._channel, "error": str(e)},
            )
            return 0
        return await self._local.publish(event)

    async def start(self) -> None:
        await self._subscribe()
        self._listener = asyncio.create_task(self._listen(), name="redis-notifier")
        logger.info("Listening for score updates", extra={"channel": self._channel})

    async def _subscribe(self) -> None:
        self._pubsub = self._client.pubsub()
        await self._pubsub.subscribe(self._channel)

    async def _discard_pubsub(self) -> None:
        pubsub, self._pubsub = self._pubsub, None
        if pubsub is None:
            return
        try:
            await pubsub.aclose()
        except (RedisError, OSError) as e:
            logger.debug(
                "Error closing notifier pubsub",
                extra={"channel": self._channel, "error": str(e)},
            )

    async def _listen(self) -> None:
        """Relay channel messages, resubscribing with backoff when Redis drops."""
        delay = self._retry_delay
        while True:
            try:
                if self._pubsub is None:
                    await self._subscribe()
                    logger.info(
                        "Resubscribed to score updates",
                        extra={"channel": self._channel},
                    )
                async for message in self._pubsub.listen():
                    delay = self._retry_delay
                    if message.get("type") != "message":
                        continue
                    await self.relay(message["data"])
                return
            except (RedisError, OSError) as e:
                logger.warning(
                    "Lost score update channel, retrying",
                    extra={
                        "channel": self._channel,
                        "error": str(e),
                        "retry_in": delay,
                    },
                )
                await self._discard_pubsub()
            await asyncio.sleep(delay)
            delay = min(delay * 2, self._max_retry_delay)

    async def close(self) -> None:
        try:
            if self._listener is not None:
                self._listener.cancel()
                try:
                    await self._listener
                except asyncio.CancelledError:
                    pass
                except Exception as e:
                    logger.error(
                        "Score update listener failed",
                        extra={"channel": self._channel, "error": str(e)},
                        exc_info=True,
                    )
            if self._pubsub is not None:
                try:
                    await self._pubsub.unsubscribe(self._channel)
                except (RedisError, OSError) as e:
                    logger.warning(
                        "Could not unsubscribe from score updates",
                        extra={"channel": self._channel, "error": str(e)},
                    )
                await self._discard_pubsub()
        finally:
            await self._local.close()
            await self._client.aclose()

"""Redis Streams consumer-group reader for identity service events."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

import redis.asyncio as aioredis

from booktalk_service.application.exceptions import ValidationError

logger = logging.getLogger(__name__)

OnStreamEventCallback = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]

RECONNECT_DELAY_SECONDS = 5


class RedisStreamConsumer:
    """XREADGROUP-based consumer for a single stream + consumer group.

    An entry is acknowledged once the callback returns or rejects it as
    malformed; any other failure leaves it pending, and it is reclaimed
    with XAUTOCLAIM and retried once it has been idle for ``reclaim_idle_ms``.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        stream: str,
        group: str,
        consumer: str,
        callback: OnStreamEventCallback,
        *,
        batch_size: int = 10,
        block_ms: int = 5000,
        reclaim_idle_ms: int = 60_000,
    ) -> None:
        self._redis = redis
        self._stream = stream
        self._group = group
        self._consumer = consumer
        self._callback = callback
        self._batch_size = batch_size
        self._block_ms = block_ms
        self._reclaim_idle_ms = reclaim_idle_ms
        self._task: asyncio.Task[None] | None = None

    async def ensure_group(self) -> None:
        try:
            await self._redis.xgroup_create(
                self._stream, self._group, id="$", mkstream=True
            )
            logger.info("Created consumer group %s on %s", self._group, self._stream)
        except aioredis.ResponseError as e:
            if "BUSYGROUP" in str(e):
                logger.debug("Consumer group %s already exists", self._group)
            else:
                raise

    async def start(self) -> None:
        await self.ensure_group()
        self._task = asyncio.create_task(self._consume(), name="redis-stream-consumer")
        logger.info("Stream consumer started: stream=%s group=%s", self._stream, self._group)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            logger.info("Stream consumer stopped")

    async def handle_entry(self, msg_id: str, fields: dict[str, Any]) -> bool:
        """Dispatch one entry; returns True when it was acknowledged."""
        event_type = fields.get("event_type", "unknown")
        try:
            await self._callback(event_type, fields)
        except ValidationError as exc:
            logger.warning("Dropping malformed %s entry %s: %s", event_type, msg_id, exc.detail)
        except Exception:
            logger.exception("Error processing stream message %s", msg_id)
            return False
        await self._redis.xack(self._stream, self._group, msg_id)
        return True

    async def reclaim_stale(self) -> int:
        """Take over entries idle past ``reclaim_idle_ms`` and retry them. Returns acks."""
        reply = await self._redis.xautoclaim(
            self._stream,
            self._group,
            self._consumer,
            min_idle_time=self._reclaim_idle_ms,
            start_id="0-0",
            count=self._batch_size,
        )
        acked = 0
        for msg_id, fields in reply[1] if reply else []:
            # Trimmed entries come back without a payload.
            if msg_id is None or fields is None:
                continue
            if await self.handle_entry(msg_id, fields):
                acked += 1
        return acked

    async def _consume(self) -> None:
        while True:
            try:
                await self.reclaim_stale()
                entries = await self._redis.xreadgroup(
                    groupname=self._group,
                    consumername=self._consumer,
                    streams={self._stream: ">"},
                    count=self._batch_size,
                    block=self._block_ms,
                )
                for _stream_name, messages in entries or []:
                    for msg_id, fields in messages:
                        await self.handle_entry(msg_id, fields)
            except asyncio.CancelledError:
                raise
            except aioredis.RedisError:
                logger.exception("Stream consumer error, retrying in %ds", RECONNECT_DELAY_SECONDS)
                await asyncio.sleep(RECONNECT_DELAY_SECONDS)

"""Mirror user profiles published by the identity service into the users table."""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any

import redis.asyncio as aioredis

from booktalk_service.config import settings
from booktalk_service.infrastructure.bus.redis_streams import RedisStreamConsumer
from booktalk_service.infrastructure.db.session import open_uow
from booktalk_service.logging_config import configure_logging
from booktalk_service.services import user_service

logger = logging.getLogger(__name__)


async def handle_event(event_type: str, fields: dict[str, Any]) -> None:
    async with open_uow() as uow:
        await user_service.apply_user_event(event_type, fields, uow)


async def run_consumer() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    consumer_name = f"consumer-{uuid.uuid4().hex[:8]}"

    consumer = RedisStreamConsumer(
        redis=redis,
        stream=settings.USER_EVENTS_STREAM,
        group=settings.USER_EVENTS_GROUP,
        consumer=consumer_name,
        callback=handle_event,
    )
    await consumer.start()
    logger.info("User events consumer started (%s)", consumer_name)

    try:
        while True:
            await asyncio.sleep(3600)
    except asyncio.CancelledError:
        pass
    finally:
        await consumer.stop()
        await redis.aclose()


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(run_consumer())


if __name__ == "__main__":
    main()

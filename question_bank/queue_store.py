from __future__ import annotations

import logging

from pydantic import ValidationError
from redis.asyncio import Redis

from question_bank.contracts import QueueItem

logger = logging.getLogger(__name__)

DEFAULT_QUEUE = "queues"
LOGGED_RAW_ITEM_LIMIT = 200


class RedisQueueStore:
    """FIFO work queue on a Redis list: push to the tail, pop from the head."""

    def __init__(
        self,
        redis_url: str,
        default_queue: str = DEFAULT_QUEUE,
        redis_client: Redis | None = None,
    ) -> None:
        self._redis = redis_client if redis_client is not None else Redis.from_url(redis_url, decode_responses=True)
        self._default_queue = default_queue

    @property
    def default_queue(self) -> str:
        return self._default_queue

    async def ping(self) -> bool:
        return bool(await self._redis.ping())

    async def push(self, item: QueueItem, queue_name: str | None = None) -> int:
        queue = queue_name or self._default_queue
        length = await self._redis.rpush(queue, item.model_dump_json())
        logger.info("added item to queue", extra={"queue": queue, "item_id": item.id})
        return int(length)

    async def pop(self, queue_name: str | None = None, remove: bool = True) -> QueueItem | None:
        queue = queue_name or self._default_queue
        if remove:
            raw = await self._redis.lpop(queue)
        else:
            head = await self._redis.lrange(queue, 0, 0)
            raw = head[0] if head else None
        if not raw:
            return None
        return self._decode(raw, queue)

    async def peek_all(self, queue_name: str | None = None) -> list[QueueItem]:
        queue = queue_name or self._default_queue
        raw_items = await self._redis.lrange(queue, 0, -1)
        items = [self._decode(raw, queue) for raw in raw_items]
        return [item for item in items if item is not None]

    async def remove_by_id(self, item_id: str, queue_name: str | None = None) -> int:
        queue = queue_name or self._default_queue
        raw_items = await self._redis.lrange(queue, 0, -1)
        removed = 0
        for raw in raw_items:
            item = self._decode(raw, queue)
            if item is not None and item.id == item_id:
                removed += int(await self._redis.lrem(queue, 1, raw))
        if removed:
            logger.info("removed items from queue", extra={"queue": queue, "item_id": item_id, "removed": removed})
        return removed

    async def clear(self, queue_name: str | None = None) -> bool:
        queue = queue_name or self._default_queue
        await self._redis.delete(queue)
        logger.info("cleared queue", extra={"queue": queue})
        return True

    async def length(self, queue_name: str | None = None) -> int:
        return int(await self._redis.llen(queue_name or self._default_queue))

    async def close(self) -> None:
        await self._redis.aclose()

    @staticmethod
    def _decode(raw: str, queue: str) -> QueueItem | None:
        try:
            return QueueItem.model_validate_json(raw)
        except ValidationError:
            logger.error(
                "failed to parse queue item",
                extra={"queue": queue, "raw_item": raw[:LOGGED_RAW_ITEM_LIMIT]},
            )
            return None

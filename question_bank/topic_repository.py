from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from question_bank.contracts import Topic
from question_bank.services.contracts import DatabaseProtocol

logger = logging.getLogger(__name__)


def _topic_from_record(record: Mapping[str, Any]) -> Topic:
    return Topic(id=str(record["id"]), title=record["title"], description=record["description"])


class TopicRepository:
    """Read access to topics plus the bulk helpers used by the CLI importer."""

    def __init__(self, database: DatabaseProtocol) -> None:
        self._db = database

    async def find_by_id(self, topic_id: str) -> Topic | None:
        try:
            UUID(str(topic_id))
        except ValueError:
            logger.warning("invalid topic id format", extra={"topic_id": topic_id})
            return None
        record = await self._db.fetchrow(
            "SELECT id::text AS id, title, description FROM topics WHERE id = $1::uuid",
            topic_id,
        )
        return _topic_from_record(record) if record is not None else None

    async def list_all(self) -> list[Topic]:
        records = await self._db.fetch("SELECT id::text AS id, title, description FROM topics ORDER BY created_at ASC")
        return [_topic_from_record(record) for record in records]

    async def insert_many(self, topics: list[dict[str, Any]]) -> int:
        if not topics:
            return 0
        logger.info("inserting topics", extra={"count": len(topics)})
        await self._db.executemany(
            "INSERT INTO topics (title, description) VALUES ($1, $2) ON CONFLICT (title) DO NOTHING",
            [(str(topic["title"]), topic.get("description")) for topic in topics],
        )
        return len(topics)

    async def clear_all(self) -> None:
        logger.info("clearing all topics")
        await self._db.execute("DELETE FROM topics")

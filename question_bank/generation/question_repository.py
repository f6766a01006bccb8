from __future__ import annotations

import json
import logging
from typing import Any

from question_bank.services.contracts import DatabaseProtocol

logger = logging.getLogger(__name__)


class QuestionRepository:
    """Generated question storage and the de-duplication read path."""

    def __init__(self, database: DatabaseProtocol) -> None:
        self._db = database

    async def list_question_texts(self, *, topic: str, language: str, limit: int) -> list[str]:
        if limit <= 0:
            return []
        records = await self._db.fetch(
            """
            SELECT question
            FROM questions
            WHERE topic = $1 AND lower(language) = lower($2)
            ORDER BY created_at ASC
            LIMIT $3
            """,
            topic,
            language,
            limit,
        )
        return [record["question"] for record in records]

    async def insert_many(self, questions: list[dict[str, Any]]) -> int:
        if not questions:
            logger.warning("no questions to store")
            return 0
        await self._db.executemany(
            """
            INSERT INTO questions (
              question, options, correct_answer, explanation, difficulty, category,
              topic, topic_id, language, position, position_level, job_id, created_at
            )
            VALUES ($1, $2::jsonb, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13)
            """,
            [
                (
                    question["question"],
                    json.dumps(question["options"]),
                    question["correct_answer"],
                    question["explanation"],
                    question["difficulty"],
                    question["category"],
                    question["topic"],
                    question["topic_id"],
                    question["language"],
                    question["position"],
                    question["position_level"],
                    question["job_id"],
                    question["created_at"],
                )
                for question in questions
            ],
        )
        logger.info("stored generated questions", extra={"question_count": len(questions)})
        return len(questions)

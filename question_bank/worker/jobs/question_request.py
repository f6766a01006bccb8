from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from question_bank.contracts import GenerationRequest, Job
from question_bank.core.audit import run_best_effort
from question_bank.errors import InvalidGenerationRequestError, TopicNotFoundError
from question_bank.generation.validation import validate_generation_request
from question_bank.services.contracts import AuditLogProtocol, QuestionGeneratorProtocol, TopicLookupProtocol

logger = logging.getLogger(__name__)

QUESTION_REQUEST_AUDIT_TARGET = "question-requests.log"


class QuestionRequestJobHandler:
    """Generates and stores questions for the topic named in a question-request job."""

    def __init__(
        self,
        topic_lookup: TopicLookupProtocol,
        generator: QuestionGeneratorProtocol,
        audit_log: AuditLogProtocol,
    ) -> None:
        self._topic_lookup = topic_lookup
        self._generator = generator
        self._audit_log = audit_log

    async def handle(self, job: Job) -> None:
        topic_id = str(job.payload.get("topic_id") or "")
        logger.info("processing question request job", extra={"job_id": job.id, "topic_id": topic_id})

        topic = await self._topic_lookup.find_by_id(topic_id)
        if topic is None:
            raise TopicNotFoundError(topic_id)

        payload: dict[str, Any] = {
            "job_id": job.id,
            "topic_id": topic_id,
            "topic": topic.title,
            "position": job.payload.get("position"),
            "language": job.payload.get("language"),
            "limit": job.payload.get("limit"),
            "timestamp": datetime.now(UTC),
        }
        errors = validate_generation_request(payload)
        if errors:
            raise InvalidGenerationRequestError(errors)

        request = GenerationRequest.model_validate(payload)
        await self._generator.generate_and_store(request)

        await run_best_effort(
            self._audit_log.append(
                QUESTION_REQUEST_AUDIT_TARGET,
                f"Processed question request for topic: {topic.title}",
                {
                    "job_id": job.id,
                    "topic_id": topic_id,
                    "limit": request.limit,
                    "position": request.position,
                    "language": request.language,
                    "timestamp": datetime.now(UTC).isoformat(),
                },
            ),
            description="question request audit record",
        )

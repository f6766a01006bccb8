from __future__ import annotations

import logging

from question_bank.contracts import QUESTION_REQUEST_JOB_TYPE, Job, QuestionRequest, QuestionRequestPayload, QueueItem
from question_bank.services.contracts import JobStoreProtocol, QueueStoreProtocol, TopicLookupProtocol

logger = logging.getLogger(__name__)


class QuestionRequestService:
    """Fans one question request out into a job per topic and enqueues each job.

    Jobs are created and pushed one topic at a time. A failure part-way through
    leaves the earlier jobs persisted and queued; nothing is rolled back.
    """

    def __init__(
        self,
        job_store: JobStoreProtocol,
        queue_store: QueueStoreProtocol,
        topic_lookup: TopicLookupProtocol,
    ) -> None:
        self._job_store = job_store
        self._queue_store = queue_store
        self._topic_lookup = topic_lookup

    async def process_question_request(self, request: QuestionRequest) -> list[Job]:
        try:
            topic_ids = list(request.topics)
            if not topic_ids:
                topic_ids = [topic.id for topic in await self._topic_lookup.list_all()]
                logger.debug("question request covers all topics", extra={"topic_count": len(topic_ids)})

            created_jobs: list[Job] = []
            for topic_id in topic_ids:
                payload = QuestionRequestPayload(
                    topic_id=topic_id,
                    limit=request.limit,
                    position=request.position,
                    language=request.language,
                )
                job = await self._job_store.create(QUESTION_REQUEST_JOB_TYPE, payload.model_dump(), status="new")
                await self._queue_store.push(QueueItem.from_job(job))
                created_jobs.append(job)
        except Exception:
            logger.exception("failed to process question request")
            raise

        logger.info("created question request jobs", extra={"job_count": len(created_jobs)})
        return created_jobs

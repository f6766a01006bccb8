from __future__ import annotations

import asyncio
import logging

from question_bank.contracts import Job
from question_bank.services.contracts import JobStoreProtocol, QueueStoreProtocol
from question_bank.worker.job_registry import JobHandlerRegistry

logger = logging.getLogger(__name__)


class JobProcessor:
    """Single-consumer polling loop over the job queue.

    Queue items only wake the loop; every job is reloaded from the job store
    before it runs. Delivery is at-most-once: a popped item whose job cannot
    be loaded is dropped, and failed jobs are not retried.
    """

    def __init__(
        self,
        *,
        job_store: JobStoreProtocol,
        queue_store: QueueStoreProtocol,
        registry: JobHandlerRegistry,
        default_queue: str,
        poll_interval_seconds: float,
    ) -> None:
        self._job_store = job_store
        self._queue_store = queue_store
        self._registry = registry
        self._default_queue = default_queue
        self._poll_interval_seconds = poll_interval_seconds
        self._running = False
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    async def process_job(self, job: Job) -> bool:
        try:
            await self._job_store.update_status(job.id, "processing")

            handler = self._registry.resolve(job.type)
            if handler is None:
                logger.warning("unknown job type", extra={"job_id": job.id, "job_type": job.type})
                await self._job_store.update_status(job.id, "failed")
                return False

            await handler.handle(job)
            await self._job_store.update_status(job.id, "done")
            logger.info("job completed", extra={"job_id": job.id, "job_type": job.type})
            return True
        except Exception:  # noqa: BLE001
            logger.exception("job processing failed", extra={"job_id": job.id, "job_type": job.type})
            await self._job_store.update_status(job.id, "failed")
            return False

    async def run_once(self, queue_name: str | None = None) -> bool:
        """Pop and process at most one item; return whether an item was popped."""
        item = await self._queue_store.pop(queue_name or self._default_queue)
        if item is None:
            return False

        logger.info("processing job from queue", extra={"job_id": item.id})
        job = await self._job_store.get_by_id(item.id)
        if job is None:
            logger.warning("job not found in database", extra={"job_id": item.id})
            return True

        await self.process_job(job)
        return True

    async def start(self, *, queue_name: str | None = None, poll_interval_ms: int | None = None) -> None:
        """Run the polling loop until :meth:`stop` is called."""
        if self._running:
            logger.warning("job processor is already running")
            return

        queue = queue_name or self._default_queue
        interval = poll_interval_ms / 1000 if poll_interval_ms else self._poll_interval_seconds
        self._running = True
        logger.info("starting job processor", extra={"queue": queue, "poll_interval_seconds": interval})

        try:
            while not self._stop_event.is_set():
                try:
                    await self.run_once(queue)
                except Exception:  # noqa: BLE001
                    logger.exception("error in job processor loop", extra={"queue": queue})
                await self._wait(interval)
        finally:
            self._running = False
            self._stop_event.clear()
            logger.info("job processor stopped", extra={"queue": queue})

    def stop(self) -> None:
        """Request the loop to exit; a request made before the loop starts is kept."""
        self._stop_event.set()
        logger.info("stopping job processor")

    async def _wait(self, seconds: float) -> None:
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except TimeoutError:
            pass

from __future__ import annotations

import asyncio
import logging
import signal
from contextlib import AsyncExitStack

from question_bank.core.logging import configure_logging
from question_bank.core.settings import get_settings
from question_bank.dependency_injection import build_container
from question_bank.services.contracts import DatabaseProtocol, QueueStoreProtocol
from question_bank.worker.processor import JobProcessor

settings = get_settings()
configure_logging(settings.effective_log_level)
logger = logging.getLogger(__name__)


async def main() -> None:
    logger.info("starting question bank worker", extra={"app_env": settings.app_env, "log_level": settings.effective_log_level})

    async with AsyncExitStack() as resources:
        container = build_container(settings)
        database = container.resolve(DatabaseProtocol)
        await database.connect()
        resources.push_async_callback(database.disconnect)
        logger.info("question bank worker database connected")

        queue_store = container.resolve(QueueStoreProtocol)
        resources.push_async_callback(queue_store.close)
        await queue_store.ping()
        logger.info("question bank worker queue connected", extra={"queue": queue_store.default_queue})

        processor = container.resolve(JobProcessor)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, processor.stop)
            except NotImplementedError:
                pass

        await processor.start()

    logger.info("question bank worker shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())

import asyncio
import logging
from contextlib import AsyncExitStack, asynccontextmanager

from fastapi import FastAPI

from question_bank.api.router import api_router
from question_bank.api.routers.health import router as health_router
from question_bank.core.logging import configure_logging
from question_bank.core.settings import get_settings
from question_bank.dependency_injection import build_container
from question_bank.services.contracts import DatabaseProtocol, QueueStoreProtocol
from question_bank.worker.processor import JobProcessor

settings = get_settings()
configure_logging(settings.effective_log_level)
logger = logging.getLogger(__name__)


async def _stop_processor(processor: JobProcessor, processor_task: "asyncio.Task[None]") -> None:
    processor.stop()
    await processor_task


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("starting question bank api", extra={"app_env": settings.app_env})

    async with AsyncExitStack() as resources:
        container = build_container(settings)
        database = container.resolve(DatabaseProtocol)
        await database.connect()
        resources.push_async_callback(database.disconnect)
        logger.info("database connection pool initialized")

        queue_store = container.resolve(QueueStoreProtocol)
        resources.push_async_callback(queue_store.close)
        await queue_store.ping()
        logger.info("job queue connection initialized", extra={"queue": queue_store.default_queue})

        app.state.settings = settings
        app.state.container = container

        if settings.job_processor_enabled:
            processor = container.resolve(JobProcessor)
            processor_task = asyncio.create_task(processor.start(), name="job-processor")
            resources.push_async_callback(_stop_processor, processor, processor_task)
        else:
            logger.info("in-process job processor disabled via config")

        yield

    logger.info("question bank api shutdown complete")


app = FastAPI(
    title="Question Bank API",
    version="0.1.0",
    docs_url="/docs" if settings.enable_swagger else None,
    redoc_url="/redoc" if settings.enable_swagger else None,
    openapi_url="/openapi.json" if settings.enable_swagger else None,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(api_router, prefix="/api")

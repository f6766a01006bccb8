from __future__ import annotations

import punq
from fastapi import Request

from question_bank.contracts import QUESTION_REQUEST_JOB_TYPE
from question_bank.core.audit import AuditLog
from question_bank.core.settings import Settings
from question_bank.database import Database
from question_bank.generation.openai_client import OpenAIChatClient
from question_bank.generation.question_generation_service import QuestionGenerationService
from question_bank.generation.question_repository import QuestionRepository
from question_bank.job_repository import JobRepository
from question_bank.queue_store import RedisQueueStore
from question_bank.services.contracts import (
    AuditLogProtocol,
    ChatCompletionClientProtocol,
    DatabaseProtocol,
    JobStoreProtocol,
    QuestionGeneratorProtocol,
    QuestionRequestServiceProtocol,
    QuestionStoreProtocol,
    QueueStoreProtocol,
    TopicLookupProtocol,
)
from question_bank.services.question_request_service import QuestionRequestService
from question_bank.topic_repository import TopicRepository
from question_bank.worker.job_registry import JobHandlerRegistry
from question_bank.worker.jobs.question_request import QuestionRequestJobHandler
from question_bank.worker.processor import JobProcessor


def build_container(settings: Settings) -> punq.Container:
    container = punq.Container()
    container.register(Settings, instance=settings)

    container.register(
        DatabaseProtocol,
        factory=lambda: Database(
            dsn=settings.question_bank_db_dsn,
            reshape_schema_query=settings.reshape_schema_query,
            min_pool_size=settings.question_bank_db_pool_min_size,
            max_pool_size=settings.question_bank_db_pool_max_size,
        ),
        scope=punq.Scope.singleton,
    )
    container.register(
        QueueStoreProtocol,
        factory=lambda: RedisQueueStore(
            redis_url=settings.question_bank_redis_url,
            default_queue=settings.job_queue_name,
        ),
        scope=punq.Scope.singleton,
    )
    container.register(
        ChatCompletionClientProtocol,
        factory=lambda: OpenAIChatClient(
            api_key=settings.openai_api_key,
            model=settings.question_generator_model,
            timeout_seconds=settings.question_generator_timeout_seconds,
        ),
        scope=punq.Scope.singleton,
    )
    container.register(
        AuditLogProtocol,
        factory=lambda: AuditLog(log_dir=settings.audit_log_dir),
        scope=punq.Scope.singleton,
    )
    container.register(JobStoreProtocol, factory=JobRepository, scope=punq.Scope.singleton)
    container.register(TopicLookupProtocol, factory=TopicRepository, scope=punq.Scope.singleton)
    container.register(QuestionStoreProtocol, factory=QuestionRepository, scope=punq.Scope.singleton)
    container.register(
        QuestionGeneratorProtocol,
        factory=lambda: QuestionGenerationService(
            chat_client=container.resolve(ChatCompletionClientProtocol),
            question_store=container.resolve(QuestionStoreProtocol),
            settings=settings,
        ),
        scope=punq.Scope.singleton,
    )
    container.register(QuestionRequestServiceProtocol, factory=QuestionRequestService, scope=punq.Scope.singleton)
    container.register(
        JobProcessor,
        factory=lambda: build_job_processor(container, settings),
        scope=punq.Scope.singleton,
    )

    return container


def build_job_processor(container: punq.Container, settings: Settings) -> JobProcessor:
    registry = JobHandlerRegistry(
        {
            QUESTION_REQUEST_JOB_TYPE: QuestionRequestJobHandler(
                topic_lookup=container.resolve(TopicLookupProtocol),
                generator=container.resolve(QuestionGeneratorProtocol),
                audit_log=container.resolve(AuditLogProtocol),
            ),
        }
    )
    return JobProcessor(
        job_store=container.resolve(JobStoreProtocol),
        queue_store=container.resolve(QueueStoreProtocol),
        registry=registry,
        default_queue=settings.job_queue_name,
        poll_interval_seconds=settings.job_poll_interval_seconds,
    )


def get_container(request: Request) -> punq.Container:
    return request.app.state.container

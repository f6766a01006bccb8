from __future__ import annotations

from question_bank.core.settings import Settings
from question_bank.dependency_injection import build_container
from question_bank.generation.openai_client import OpenAIChatClient
from question_bank.generation.question_generation_service import QuestionGenerationService
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
from question_bank.worker.processor import JobProcessor


def _settings() -> Settings:
    return Settings(_env_file=None, OPENAI_API_KEY="test-key", JOB_QUEUE_NAME="test-queue")


def test_container_resolves_singleton_services() -> None:
    container = build_container(_settings())

    for key in (
        DatabaseProtocol,
        QueueStoreProtocol,
        JobStoreProtocol,
        TopicLookupProtocol,
        QuestionStoreProtocol,
        AuditLogProtocol,
        ChatCompletionClientProtocol,
        QuestionGeneratorProtocol,
        QuestionRequestServiceProtocol,
        JobProcessor,
    ):
        assert container.resolve(key) is container.resolve(key)


def test_container_wires_concrete_implementations() -> None:
    container = build_container(_settings())

    queue_store = container.resolve(QueueStoreProtocol)
    assert isinstance(queue_store, RedisQueueStore)
    assert queue_store.default_queue == "test-queue"
    assert isinstance(container.resolve(JobStoreProtocol), JobRepository)
    assert isinstance(container.resolve(ChatCompletionClientProtocol), OpenAIChatClient)
    assert isinstance(container.resolve(QuestionGeneratorProtocol), QuestionGenerationService)
    assert isinstance(container.resolve(QuestionRequestServiceProtocol), QuestionRequestService)
    assert container.resolve(JobProcessor).is_running is False

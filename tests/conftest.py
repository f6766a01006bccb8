"""Shared test utilities and fixtures for question bank tests."""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from typing import Any

import pytest
import punq

from question_bank.contracts import GenerationRequest, Job, JobStatus, QueueItem, Topic
from question_bank.core.settings import Settings


class FakeDatabase:
    """Records every statement and replays queued results at the asyncpg boundary."""

    def __init__(self) -> None:
        self.fetchrow_calls: list[tuple[str, tuple]] = []
        self.fetch_calls: list[tuple[str, tuple]] = []
        self.execute_calls: list[tuple[str, tuple]] = []
        self.executemany_calls: list[tuple[str, list]] = []
        self.fetchrow_results: list[dict[str, Any] | None] = []
        self.fetch_results: list[list[dict[str, Any]]] = []

    async def connect(self) -> None:
        return None

    async def disconnect(self) -> None:
        return None

    async def fetchrow(self, query: str, *args):
        self.fetchrow_calls.append((query, args))
        return self.fetchrow_results.pop(0) if self.fetchrow_results else None

    async def fetch(self, query: str, *args):
        self.fetch_calls.append((query, args))
        return self.fetch_results.pop(0) if self.fetch_results else []

    async def execute(self, query: str, *args):
        self.execute_calls.append((query, args))
        return "DELETE 0"

    async def executemany(self, query: str, args):
        self.executemany_calls.append((query, list(args)))


class FakeJobStore:
    """In-memory job store with per-job status history."""

    def __init__(self) -> None:
        self.jobs: dict[str, Job] = {}
        self.status_history: dict[str, list[JobStatus]] = defaultdict(list)
        self.fail_on_status: JobStatus | None = None
        self._clock = datetime(2026, 1, 1, tzinfo=UTC)

    def add(self, job_type: str, payload: dict[str, Any], status: JobStatus = "new") -> Job:
        self._clock += timedelta(seconds=1)
        job = Job(
            id=f"job-{len(self.jobs) + 1}",
            type=job_type,
            payload=dict(payload),
            status=status,
            created_at=self._clock,
            updated_at=self._clock,
        )
        self.jobs[job.id] = job
        self.status_history[job.id].append(status)
        return job

    async def create(self, job_type: str, payload: dict[str, Any], status: JobStatus = "new") -> Job:
        return self.add(job_type, payload, status)

    async def get_by_id(self, job_id: str) -> Job | None:
        return self.jobs.get(job_id)

    async def update_status(self, job_id: str, status: JobStatus) -> Job | None:
        if status == self.fail_on_status:
            raise RuntimeError(f"status write to {status} failed")
        job = self.jobs.get(job_id)
        if job is None:
            return None
        updated = job.model_copy(update={"status": status})
        self.jobs[job_id] = updated
        self.status_history[job_id].append(status)
        return updated

    async def delete(self, job_id: str) -> Job | None:
        return self.jobs.pop(job_id, None)

    async def get_by_type_and_status(self, job_type: str, status: JobStatus | None = None) -> list[Job]:
        jobs = [job for job in self.jobs.values() if job.type == job_type and (status is None or job.status == status)]
        return sorted(jobs, key=lambda job: job.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)


class FakeQueueStore:
    """In-memory FIFO queues keyed by name."""

    def __init__(self, default_queue: str = "queues") -> None:
        self._default_queue = default_queue
        self.queues: dict[str, list[QueueItem]] = defaultdict(list)
        self.fail_on_push_number: int | None = None
        self.fail_on_pop = False
        self.push_count = 0
        self.pop_calls: list[str] = []
        self.closed = False

    @property
    def default_queue(self) -> str:
        return self._default_queue

    async def ping(self) -> bool:
        return True

    async def push(self, item: QueueItem, queue_name: str | None = None) -> int:
        self.push_count += 1
        if self.push_count == self.fail_on_push_number:
            raise ConnectionError("queue unavailable")
        queue = self.queues[queue_name or self._default_queue]
        queue.append(item)
        return len(queue)

    async def pop(self, queue_name: str | None = None, remove: bool = True) -> QueueItem | None:
        name = queue_name or self._default_queue
        self.pop_calls.append(name)
        if self.fail_on_pop:
            raise ConnectionError("queue unavailable")
        queue = self.queues[name]
        if not queue:
            return None
        return queue.pop(0) if remove else queue[0]

    async def peek_all(self, queue_name: str | None = None) -> list[QueueItem]:
        return list(self.queues[queue_name or self._default_queue])

    async def remove_by_id(self, item_id: str, queue_name: str | None = None) -> int:
        name = queue_name or self._default_queue
        kept = [item for item in self.queues[name] if item.id != item_id]
        removed = len(self.queues[name]) - len(kept)
        self.queues[name] = kept
        return removed

    async def clear(self, queue_name: str | None = None) -> bool:
        self.queues.pop(queue_name or self._default_queue, None)
        return True

    async def length(self, queue_name: str | None = None) -> int:
        return len(self.queues[queue_name or self._default_queue])

    async def close(self) -> None:
        self.closed = True


class FakeTopicLookup:
    def __init__(self, topics: list[Topic] | None = None) -> None:
        self.topics = {topic.id: topic for topic in topics or []}

    async def find_by_id(self, topic_id: str) -> Topic | None:
        return self.topics.get(topic_id)

    async def list_all(self) -> list[Topic]:
        return list(self.topics.values())


class FakeQuestionGenerator:
    def __init__(self, error: Exception | None = None) -> None:
        self.requests: list[GenerationRequest] = []
        self.error = error

    async def generate_and_store(self, request: GenerationRequest) -> None:
        self.requests.append(request)
        if self.error is not None:
            raise self.error


class FakeAuditLog:
    def __init__(self, error: Exception | None = None) -> None:
        self.records: list[tuple[str, str, dict[str, Any] | None]] = []
        self.error = error

    async def append(self, target: str, message: str, data: dict[str, Any] | None = None) -> None:
        if self.error is not None:
            raise self.error
        self.records.append((target, message, data))


TOPICS = [
    Topic(id="11111111-1111-4111-8111-111111111111", title="JavaScript Closures"),
    Topic(id="22222222-2222-4222-8222-222222222222", title="Python Generators"),
    Topic(id="33333333-3333-4333-8333-333333333333", title="SQL Joins"),
]


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_job_store() -> FakeJobStore:
    return FakeJobStore()


@pytest.fixture
def fake_queue_store() -> FakeQueueStore:
    return FakeQueueStore()


@pytest.fixture
def fake_topic_lookup() -> FakeTopicLookup:
    return FakeTopicLookup(TOPICS)


@pytest.fixture
def test_settings() -> Settings:
    return Settings()


def build_test_request(container: punq.Container):
    """Build a request-shaped object using a real punq container in app state."""

    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(container=container)))


def build_test_container(bindings: dict[object, object]) -> punq.Container:
    """Create a punq container and bind protocol/service keys to test doubles."""

    container = punq.Container()
    for key, value in bindings.items():
        container.register(key, instance=value)
    return container

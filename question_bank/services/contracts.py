from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

import asyncpg

from question_bank.contracts import GenerationRequest, Job, JobStatus, QuestionRequest, QueueItem, Topic


class DatabaseProtocol(Protocol):
    """Abstraction for async SQL execution against the question bank Postgres store."""

    async def connect(self) -> None:
        """Initialize underlying DB resources before request handling begins."""

    async def disconnect(self) -> None:
        """Release open DB resources during application shutdown."""

    async def fetchrow(self, query: str, *args: object) -> asyncpg.Record | None:
        """Execute a query and return a single row, or ``None`` when no row matches."""

    async def fetch(self, query: str, *args: object) -> Sequence[asyncpg.Record]:
        """Execute a query and return all matching rows."""

    async def execute(self, query: str, *args: object) -> str:
        """Execute a write statement and return the backend status string."""

    async def executemany(self, query: str, args: Sequence[Sequence[object]]) -> None:
        """Execute one statement for each argument tuple."""


class JobStoreProtocol(Protocol):
    """Authoritative persistence of job records and their status."""

    async def create(self, job_type: str, payload: dict[str, Any], status: JobStatus = "new") -> Job:
        """Persist a new job and return it with its assigned id and timestamps."""

    async def get_by_id(self, job_id: str) -> Job | None:
        """Load a job by id, or ``None`` when it does not exist."""

    async def update_status(self, job_id: str, status: JobStatus) -> Job | None:
        """Write a new status and return the updated job, or ``None`` if unknown."""

    async def delete(self, job_id: str) -> Job | None:
        """Delete a job and return the removed record, or ``None`` if unknown."""

    async def get_by_type_and_status(self, job_type: str, status: JobStatus | None = None) -> list[Job]:
        """List jobs of one type, optionally filtered by status, newest first."""


class QueueStoreProtocol(Protocol):
    """List-structured FIFO used as the job wake-up signal."""

    @property
    def default_queue(self) -> str:
        """Queue name used when callers pass none."""

    async def ping(self) -> bool:
        """Probe store availability during startup checks."""

    async def push(self, item: QueueItem, queue_name: str | None = None) -> int:
        """Append an item to the tail and return the new queue length."""

    async def pop(self, queue_name: str | None = None, remove: bool = True) -> QueueItem | None:
        """Return the head item, removing it unless ``remove`` is false."""

    async def peek_all(self, queue_name: str | None = None) -> list[QueueItem]:
        """Return every queued item without removing any."""

    async def remove_by_id(self, item_id: str, queue_name: str | None = None) -> int:
        """Remove every item with the given id and return how many were removed."""

    async def clear(self, queue_name: str | None = None) -> bool:
        """Drop the whole queue."""

    async def length(self, queue_name: str | None = None) -> int:
        """Return the number of queued items."""

    async def close(self) -> None:
        """Release underlying network resources during shutdown."""


class TopicLookupProtocol(Protocol):
    """Read-only access to topics."""

    async def find_by_id(self, topic_id: str) -> Topic | None:
        """Resolve a topic by id, or ``None`` when it does not exist."""

    async def list_all(self) -> list[Topic]:
        """Return every topic currently stored."""


class QuestionRequestServiceProtocol(Protocol):
    """Producer contract used by the HTTP layer."""

    async def process_question_request(self, request: QuestionRequest) -> list[Job]:
        """Create and enqueue one question-request job per topic."""


class QuestionGeneratorProtocol(Protocol):
    """AI-backed generation that persists its output."""

    async def generate_and_store(self, request: GenerationRequest) -> None:
        """Generate questions for the request and store them; raises on failure."""


class QuestionStoreProtocol(Protocol):
    """Persistence of generated questions."""

    async def list_question_texts(self, *, topic: str, language: str, limit: int) -> list[str]:
        """Return stored question texts for de-duplication prompts."""

    async def insert_many(self, questions: list[dict[str, Any]]) -> int:
        """Store generated questions and return how many were written."""


class ChatCompletionClientProtocol(Protocol):
    """Minimal text completion contract over a hosted model."""

    async def complete(self, prompt: str, *, temperature: float, max_output_tokens: int) -> str:
        """Send a single-turn prompt and return the model's text output."""


class AuditLogProtocol(Protocol):
    """Named append-only audit targets."""

    async def append(self, target: str, message: str, data: dict[str, Any] | None = None) -> None:
        """Append one structured record to ``target``."""

from __future__ import annotations

import pytest
from fastapi import FastAPI

import question_bank.main as main_module
from question_bank.core.settings import Settings
from question_bank.services.contracts import DatabaseProtocol, QueueStoreProtocol
from question_bank.worker.job_registry import JobHandlerRegistry
from question_bank.worker.processor import JobProcessor
from tests.conftest import FakeDatabase, FakeJobStore, FakeQueueStore, build_test_container


class RecordingDatabase(FakeDatabase):
    def __init__(self, events: list[str]) -> None:
        super().__init__()
        self.events = events

    async def connect(self) -> None:
        self.events.append("database connected")

    async def disconnect(self) -> None:
        self.events.append("database disconnected")


class RecordingQueueStore(FakeQueueStore):
    def __init__(self, events: list[str], ping_error: Exception | None = None) -> None:
        super().__init__()
        self.events = events
        self.ping_error = ping_error

    async def ping(self) -> bool:
        if self.ping_error is not None:
            raise self.ping_error
        return True

    async def close(self) -> None:
        await super().close()
        self.events.append("queue closed")


class NoopHandler:
    async def handle(self, job) -> None:
        return None


def _use_container(monkeypatch, bindings: dict[object, object], *, processor_enabled: bool) -> None:
    container = build_test_container(bindings)
    monkeypatch.setattr(main_module, "build_container", lambda settings: container)
    monkeypatch.setattr(
        main_module,
        "settings",
        Settings(_env_file=None, JOB_PROCESSOR_ENABLED=processor_enabled),
    )


@pytest.mark.asyncio
async def test_lifespan_closes_database_when_queue_ping_fails(monkeypatch) -> None:
    events: list[str] = []
    queue_store = RecordingQueueStore(events, ping_error=ConnectionError("redis unavailable"))
    _use_container(
        monkeypatch,
        {DatabaseProtocol: RecordingDatabase(events), QueueStoreProtocol: queue_store},
        processor_enabled=False,
    )

    with pytest.raises(ConnectionError, match="redis unavailable"):
        async with main_module.lifespan(FastAPI()):
            pass

    assert events == ["database connected", "queue closed", "database disconnected"]


@pytest.mark.asyncio
async def test_lifespan_stops_processor_before_closing_stores(monkeypatch) -> None:
    events: list[str] = []
    queue_store = RecordingQueueStore(events)
    processor = JobProcessor(
        job_store=FakeJobStore(),
        queue_store=queue_store,
        registry=JobHandlerRegistry({"question-request": NoopHandler()}),
        default_queue="queues",
        poll_interval_seconds=60,
    )
    _use_container(
        monkeypatch,
        {DatabaseProtocol: RecordingDatabase(events), QueueStoreProtocol: queue_store, JobProcessor: processor},
        processor_enabled=True,
    )
    app = FastAPI()

    async with main_module.lifespan(app):
        assert app.state.container is not None

    assert processor.is_running is False
    assert events == ["database connected", "queue closed", "database disconnected"]

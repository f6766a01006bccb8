from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from question_bank.job_repository import JobRepository

JOB_ID = "a4af6654-fcef-4854-a86a-c8b4d237043a"


def _record(status: str = "new", payload: object | None = None) -> dict[str, object]:
    return {
        "id": JOB_ID,
        "job_type": "question-request",
        "payload": payload if payload is not None else json.dumps({"topic_id": "t-1", "limit": 5}),
        "status": status,
        "created_at": datetime(2026, 1, 1, tzinfo=UTC),
        "updated_at": datetime(2026, 1, 1, tzinfo=UTC),
    }


@pytest.mark.asyncio
async def test_create_serializes_payload_for_jsonb(fake_database) -> None:
    fake_database.fetchrow_results.append(_record())
    repository = JobRepository(fake_database)  # type: ignore[arg-type]

    job = await repository.create("question-request", {"topic_id": "t-1", "limit": 5})

    query, args = fake_database.fetchrow_calls[0]
    assert "INSERT INTO question_jobs" in query
    assert args[0] == "question-request"
    assert isinstance(args[1], str)
    assert json.loads(args[1]) == {"topic_id": "t-1", "limit": 5}
    assert args[2] == "new"
    assert job.id == JOB_ID
    assert job.payload == {"topic_id": "t-1", "limit": 5}
    assert job.status == "new"


@pytest.mark.asyncio
async def test_get_by_id_returns_none_for_malformed_id_without_querying(fake_database) -> None:
    repository = JobRepository(fake_database)  # type: ignore[arg-type]

    assert await repository.get_by_id("not-a-uuid") is None
    assert fake_database.fetchrow_calls == []


@pytest.mark.asyncio
async def test_get_by_id_accepts_decoded_payload(fake_database) -> None:
    fake_database.fetchrow_results.append(_record(payload={"topic_id": "t-1"}))
    repository = JobRepository(fake_database)  # type: ignore[arg-type]

    job = await repository.get_by_id(JOB_ID)

    assert job is not None
    assert job.payload == {"topic_id": "t-1"}


@pytest.mark.asyncio
async def test_update_status_writes_status_and_returns_updated_job(fake_database) -> None:
    fake_database.fetchrow_results.append(_record(status="processing"))
    repository = JobRepository(fake_database)  # type: ignore[arg-type]

    job = await repository.update_status(JOB_ID, "processing")

    query, args = fake_database.fetchrow_calls[0]
    assert "SET status = $2, updated_at = NOW()" in query
    assert args == (JOB_ID, "processing")
    assert job is not None and job.status == "processing"


@pytest.mark.asyncio
async def test_update_status_returns_none_for_unknown_job(fake_database) -> None:
    repository = JobRepository(fake_database)  # type: ignore[arg-type]

    assert await repository.update_status(JOB_ID, "done") is None


@pytest.mark.asyncio
async def test_get_by_type_and_status_orders_newest_first(fake_database) -> None:
    fake_database.fetch_results.append([_record(status="failed")])
    repository = JobRepository(fake_database)  # type: ignore[arg-type]

    jobs = await repository.get_by_type_and_status("question-request", "failed")

    query, args = fake_database.fetch_calls[0]
    assert "ORDER BY created_at DESC" in query
    assert args == ("question-request", "failed")
    assert [job.status for job in jobs] == ["failed"]


@pytest.mark.asyncio
async def test_delete_returns_removed_job(fake_database) -> None:
    fake_database.fetchrow_results.append(_record())
    repository = JobRepository(fake_database)  # type: ignore[arg-type]

    job = await repository.delete(JOB_ID)

    assert job is not None and job.id == JOB_ID
    assert "DELETE FROM question_jobs" in fake_database.fetchrow_calls[0][0]

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from question_bank.contracts import Job, JobStatus
from question_bank.services.contracts import DatabaseProtocol

logger = logging.getLogger(__name__)

_JOB_COLUMNS = "id::text AS id, job_type, payload, status, created_at, updated_at"


def _is_job_id(value: str) -> bool:
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


def _job_from_record(record: Mapping[str, Any]) -> Job:
    payload = record["payload"]
    if isinstance(payload, str):
        payload = json.loads(payload)
    return Job(
        id=str(record["id"]),
        type=record["job_type"],
        payload=dict(payload or {}),
        status=record["status"],
        created_at=record["created_at"],
        updated_at=record["updated_at"],
    )


class JobRepository:
    """Job records stored in Postgres with a jsonb payload column."""

    def __init__(self, database: DatabaseProtocol) -> None:
        self._db = database

    async def create(self, job_type: str, payload: dict[str, Any], status: JobStatus = "new") -> Job:
        record = await self._db.fetchrow(
            f"""
            INSERT INTO question_jobs (job_type, payload, status)
            VALUES ($1, $2::jsonb, $3)
            RETURNING {_JOB_COLUMNS}
            """,
            job_type,
            json.dumps(payload),
            status,
        )
        if record is None:
            raise RuntimeError("job insert returned no row")
        job = _job_from_record(record)
        logger.info("job created", extra={"job_id": job.id, "job_type": job.type})
        return job

    async def get_by_id(self, job_id: str) -> Job | None:
        if not _is_job_id(job_id):
            logger.warning("invalid job id format", extra={"job_id": job_id})
            return None
        record = await self._db.fetchrow(
            f"SELECT {_JOB_COLUMNS} FROM question_jobs WHERE id = $1::uuid",
            job_id,
        )
        return _job_from_record(record) if record is not None else None

    async def update_status(self, job_id: str, status: JobStatus) -> Job | None:
        if not _is_job_id(job_id):
            logger.warning("job not found for status update", extra={"job_id": job_id, "status": status})
            return None
        record = await self._db.fetchrow(
            f"""
            UPDATE question_jobs
            SET status = $2, updated_at = NOW()
            WHERE id = $1::uuid
            RETURNING {_JOB_COLUMNS}
            """,
            job_id,
            status,
        )
        if record is None:
            logger.warning("job not found for status update", extra={"job_id": job_id, "status": status})
            return None
        logger.info("job status updated", extra={"job_id": job_id, "status": status})
        return _job_from_record(record)

    async def delete(self, job_id: str) -> Job | None:
        if not _is_job_id(job_id):
            return None
        record = await self._db.fetchrow(
            f"DELETE FROM question_jobs WHERE id = $1::uuid RETURNING {_JOB_COLUMNS}",
            job_id,
        )
        if record is None:
            logger.warning("job not found for deletion", extra={"job_id": job_id})
            return None
        logger.info("job deleted", extra={"job_id": job_id})
        return _job_from_record(record)

    async def get_by_type_and_status(self, job_type: str, status: JobStatus | None = None) -> list[Job]:
        records = await self._db.fetch(
            f"""
            SELECT {_JOB_COLUMNS}
            FROM question_jobs
            WHERE job_type = $1
              AND ($2::text IS NULL OR status = $2)
            ORDER BY created_at DESC
            """,
            job_type,
            status,
        )
        return [_job_from_record(record) for record in records]

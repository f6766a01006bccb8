from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, get_args

from question_bank.contracts import Job, JobType

SUPPORTED_JOB_TYPES: tuple[str, ...] = get_args(JobType)


class JobHandler(Protocol):
    async def handle(self, job: Job) -> None:
        """Run the type-specific work for one job; raise to mark it failed."""


class JobHandlerRegistry:
    """Closed mapping from supported job types to their handlers."""

    def __init__(self, handlers: Mapping[JobType, JobHandler]) -> None:
        missing = [job_type for job_type in SUPPORTED_JOB_TYPES if job_type not in handlers]
        if missing:
            raise ValueError(f"no handler registered for job types: {', '.join(missing)}")
        unknown = [job_type for job_type in handlers if job_type not in SUPPORTED_JOB_TYPES]
        if unknown:
            raise ValueError(f"handlers registered for unsupported job types: {', '.join(unknown)}")
        self._handlers = dict(handlers)

    def resolve(self, job_type: str) -> JobHandler | None:
        """Return the handler for ``job_type``, or ``None`` for kinds this build does not know."""
        return self._handlers.get(job_type)  # type: ignore[call-overload]

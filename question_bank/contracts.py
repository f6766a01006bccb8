from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

JobStatus = Literal["new", "processing", "done", "failed"]
JobType = Literal["question-request"]
Position = Literal["intern", "fresher", "junior", "middle", "senior", "expert"]

QUESTION_REQUEST_JOB_TYPE: JobType = "question-request"


class Job(BaseModel):
    id: str
    type: str
    payload: dict[str, Any]
    status: JobStatus = "new"
    created_at: datetime | None = None
    updated_at: datetime | None = None


class QueueItem(BaseModel):
    """Thin reference to a job; the job store stays authoritative for state."""

    id: str
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_job(cls, job: Job) -> QueueItem:
        return cls(id=job.id, type=job.type, payload=job.payload)


class Topic(BaseModel):
    id: str
    title: str
    description: str | None = None


class QuestionRequest(BaseModel):
    topics: list[str] = Field(default_factory=list)
    limit: int = 10
    position: str
    language: str


class QuestionRequestPayload(BaseModel):
    topic_id: str
    limit: int
    position: str
    language: str


class GenerationRequest(BaseModel):
    job_id: str = Field(..., min_length=1)
    topic_id: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)
    limit: int = Field(default=10, ge=1)
    timestamp: datetime


class GeneratedQuestion(BaseModel):
    question: str
    options: list[str]
    correct_answer: int = Field(..., ge=0, le=3)
    explanation: str
    difficulty: Literal["easy", "medium", "hard"]
    category: str

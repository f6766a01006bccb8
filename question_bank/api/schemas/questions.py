from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from question_bank.contracts import Position


class QuestionRequestBody(BaseModel):
    topics: list[str] = Field(default_factory=list, description="Topic ids to generate for; empty means every topic")
    limit: int | None = Field(default=None, gt=0, description="Questions to generate per topic")
    position: Position = Field(..., description="Target seniority of the generated questions")
    language: str = Field(..., min_length=1, description="Language the questions are written in")

    @field_validator("position", mode="before")
    @classmethod
    def _normalize_position(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("topics")
    @classmethod
    def _drop_blank_topics(cls, value: list[str]) -> list[str]:
        return [topic.strip() for topic in value if topic.strip()]


class QueuedJobResponse(BaseModel):
    id: str
    type: str
    status: str
    created_at: datetime | None = None


class QuestionRequestData(BaseModel):
    job_count: int
    jobs: list[QueuedJobResponse]


class QuestionRequestResponse(BaseModel):
    success: bool = True
    message: str
    data: QuestionRequestData

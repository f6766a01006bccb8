from question_bank.api.schemas.jobs import JobResponse
from question_bank.api.schemas.queue import (
    QueueClearedResponse,
    QueueItemRemovedResponse,
    QueueItemResponse,
    QueueSnapshotResponse,
)
from question_bank.api.schemas.questions import (
    QuestionRequestBody,
    QuestionRequestData,
    QuestionRequestResponse,
    QueuedJobResponse,
)

__all__ = [
    "JobResponse",
    "QuestionRequestBody",
    "QuestionRequestData",
    "QuestionRequestResponse",
    "QueueClearedResponse",
    "QueueItemRemovedResponse",
    "QueueItemResponse",
    "QueueSnapshotResponse",
    "QueuedJobResponse",
]

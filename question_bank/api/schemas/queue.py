from typing import Any

from pydantic import BaseModel, Field


class QueueItemResponse(BaseModel):
    id: str
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)


class QueueSnapshotResponse(BaseModel):
    queue_name: str
    length: int
    items: list[QueueItemResponse]


class QueueClearedResponse(BaseModel):
    queue_name: str
    cleared: bool


class QueueItemRemovedResponse(BaseModel):
    queue_name: str
    removed: int

from fastapi import APIRouter, Query, Request

from question_bank.api.schemas.queue import (
    QueueClearedResponse,
    QueueItemRemovedResponse,
    QueueItemResponse,
    QueueSnapshotResponse,
)
from question_bank.dependency_injection import get_container
from question_bank.services.contracts import QueueStoreProtocol

router = APIRouter(prefix="/queue", tags=["queue"])


@router.get("", summary="Inspect queued items without consuming them", response_model=QueueSnapshotResponse)
async def get_queue(request: Request, queue_name: str | None = Query(default=None, min_length=1)) -> QueueSnapshotResponse:
    queue_store = get_container(request).resolve(QueueStoreProtocol)
    name = queue_name or queue_store.default_queue
    items = await queue_store.peek_all(name)
    return QueueSnapshotResponse(
        queue_name=name,
        length=await queue_store.length(name),
        items=[QueueItemResponse(id=item.id, type=item.type, payload=item.payload) for item in items],
    )


@router.delete("", summary="Drop every item from a queue", response_model=QueueClearedResponse)
async def clear_queue(request: Request, queue_name: str | None = Query(default=None, min_length=1)) -> QueueClearedResponse:
    queue_store = get_container(request).resolve(QueueStoreProtocol)
    name = queue_name or queue_store.default_queue
    return QueueClearedResponse(queue_name=name, cleared=await queue_store.clear(name))


@router.delete("/items/{job_id}", summary="Remove queued items for one job", response_model=QueueItemRemovedResponse)
async def remove_queue_item(
    job_id: str,
    request: Request,
    queue_name: str | None = Query(default=None, min_length=1),
) -> QueueItemRemovedResponse:
    queue_store = get_container(request).resolve(QueueStoreProtocol)
    name = queue_name or queue_store.default_queue
    return QueueItemRemovedResponse(queue_name=name, removed=await queue_store.remove_by_id(job_id, name))

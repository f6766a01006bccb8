import logging

from fastapi import APIRouter, Request, Response, status

from question_bank.dependency_injection import get_container
from question_bank.services.contracts import DatabaseProtocol, QueueStoreProtocol

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", summary="Check database and job queue connectivity")
async def readyz(request: Request, response: Response) -> dict[str, str]:
    container = get_container(request)
    checks: dict[str, str] = {}

    try:
        await container.resolve(DatabaseProtocol).fetchrow("SELECT 1")
        checks["database"] = "ok"
    except Exception:  # noqa: BLE001
        logger.warning("database readiness check failed", exc_info=True)
        checks["database"] = "unavailable"

    try:
        await container.resolve(QueueStoreProtocol).ping()
        checks["queue"] = "ok"
    except Exception:  # noqa: BLE001
        logger.warning("queue readiness check failed", exc_info=True)
        checks["queue"] = "unavailable"

    ready = all(value == "ok" for value in checks.values())
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "ok" if ready else "unavailable", **checks}

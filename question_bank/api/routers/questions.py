import logging

from fastapi import APIRouter, HTTPException, Request, status

from question_bank.api.schemas.questions import (
    QuestionRequestBody,
    QuestionRequestData,
    QuestionRequestResponse,
    QueuedJobResponse,
)
from question_bank.contracts import QuestionRequest
from question_bank.core.settings import Settings
from question_bank.dependency_injection import get_container
from question_bank.services.contracts import QuestionRequestServiceProtocol

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post(
    "/request",
    summary="Request question generation",
    description="Creates one question-request job per topic and queues each for asynchronous generation.",
    response_model=QuestionRequestResponse,
)
async def request_questions(payload: QuestionRequestBody, request: Request) -> QuestionRequestResponse:
    container = get_container(request)
    settings = container.resolve(Settings)
    service = container.resolve(QuestionRequestServiceProtocol)

    question_request = QuestionRequest(
        topics=payload.topics,
        limit=payload.limit or settings.question_request_default_limit,
        position=payload.position,
        language=payload.language,
    )
    try:
        jobs = await service.process_question_request(question_request)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to process question request",
        ) from exc

    return QuestionRequestResponse(
        success=True,
        message=f"Created {len(jobs)} question request jobs",
        data=QuestionRequestData(
            job_count=len(jobs),
            jobs=[
                QueuedJobResponse(id=job.id, type=job.type, status=job.status, created_at=job.created_at)
                for job in jobs
            ],
        ),
    )

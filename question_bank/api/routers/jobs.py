from fastapi import APIRouter, HTTPException, Query, Request, status

from question_bank.api.schemas.jobs import JobResponse
from question_bank.contracts import QUESTION_REQUEST_JOB_TYPE, Job, JobStatus
from question_bank.dependency_injection import get_container
from question_bank.services.contracts import JobStoreProtocol

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        type=job.type,
        payload=job.payload,
        status=job.status,
        created_at=job.created_at,
        updated_at=job.updated_at,
    )


@router.get("", summary="List jobs by type and status", response_model=list[JobResponse])
async def list_jobs(
    request: Request,
    job_type: str = Query(default=QUESTION_REQUEST_JOB_TYPE, alias="type", min_length=1),
    job_status: JobStatus | None = Query(default=None, alias="status"),
) -> list[JobResponse]:
    job_store = get_container(request).resolve(JobStoreProtocol)
    jobs = await job_store.get_by_type_and_status(job_type, job_status)
    return [_job_response(job) for job in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, request: Request) -> JobResponse:
    job = await get_container(request).resolve(JobStoreProtocol).get_by_id(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="job not found")
    return _job_response(job)


@router.delete("/{job_id}", response_model=JobResponse)
async def delete_job(job_id: str, request: Request) -> JobResponse:
    job = await get_container(request).resolve(JobStoreProtocol).delete(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="job not found")
    return _job_response(job)

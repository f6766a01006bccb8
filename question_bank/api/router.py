from fastapi import APIRouter

from question_bank.api.routers.jobs import router as jobs_router
from question_bank.api.routers.questions import router as questions_router
from question_bank.api.routers.queue import router as queue_router

api_router = APIRouter()
api_router.include_router(questions_router)
api_router.include_router(jobs_router)
api_router.include_router(queue_router)

"""Service layer orchestrating application use-cases."""

from question_bank.services.question_request_service import QuestionRequestService

__all__ = ["QuestionRequestService"]

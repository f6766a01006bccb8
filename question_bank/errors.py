from __future__ import annotations


class QuestionBankError(Exception):
    """Base class for domain errors raised by the question pipeline."""


class TopicNotFoundError(QuestionBankError):
    def __init__(self, topic_id: str) -> None:
        super().__init__(f"Topic with ID {topic_id} not found")
        self.topic_id = topic_id


class InvalidGenerationRequestError(QuestionBankError):
    def __init__(self, errors: list[str]) -> None:
        super().__init__(f"Invalid payload: {', '.join(errors)}")
        self.errors = errors


class InvalidGeneratedContentError(QuestionBankError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid generated content: {reason}")
        self.reason = reason


class QuestionGenerationError(QuestionBankError):
    """Upstream model call failed or returned nothing usable."""

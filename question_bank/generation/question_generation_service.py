from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from question_bank.contracts import GeneratedQuestion, GenerationRequest
from question_bank.core.settings import Settings
from question_bank.errors import InvalidGeneratedContentError
from question_bank.generation.content_parser import parse_generated_content
from question_bank.generation.positions import PositionMetadata, format_position_for_display, get_position_metadata
from question_bank.generation.prompt_builder import construct_prompt
from question_bank.generation.question_format import QuestionFormat, load_question_format
from question_bank.services.contracts import ChatCompletionClientProtocol, QuestionStoreProtocol

logger = logging.getLogger(__name__)


class QuestionGenerationService:
    """Generates interview questions with a hosted model and stores them."""

    def __init__(
        self,
        chat_client: ChatCompletionClientProtocol,
        question_store: QuestionStoreProtocol,
        settings: Settings,
        question_format: QuestionFormat | None = None,
    ) -> None:
        self._chat_client = chat_client
        self._question_store = question_store
        self._settings = settings
        self._question_format = question_format

    async def generate_and_store(self, request: GenerationRequest) -> None:
        position = request.position.lower()
        metadata = get_position_metadata(position)
        existing = await self._question_store.list_question_texts(
            topic=request.topic,
            language=request.language,
            limit=self._settings.existing_questions_limit,
        )
        logger.debug("loaded existing questions", extra={"job_id": request.job_id, "existing_count": len(existing)})

        prompt = construct_prompt(
            self._settings.question_generator_prompt_template,
            self._format(),
            existing,
            topic=request.topic,
            language=request.language,
            limit=request.limit,
            difficulty_text=metadata.difficulty_text,
            position_instruction=metadata.position_instruction,
        )
        content = await self._chat_client.complete(
            prompt,
            temperature=self._settings.question_generator_temperature,
            max_output_tokens=self._settings.question_generator_max_output_tokens,
        )

        questions = parse_generated_content(content)
        if not questions:
            raise InvalidGeneratedContentError("model returned no questions")

        rows = self._with_metadata(questions[: request.limit], request, metadata)
        await self._question_store.insert_many(rows)
        logger.info(
            "generated questions stored",
            extra={"job_id": request.job_id, "topic": request.topic, "question_count": len(rows)},
        )

    def _format(self) -> QuestionFormat:
        if self._question_format is None:
            self._question_format = load_question_format(self._settings.question_format_path)
        return self._question_format

    @staticmethod
    def _with_metadata(
        questions: list[GeneratedQuestion],
        request: GenerationRequest,
        metadata: PositionMetadata,
    ) -> list[dict[str, Any]]:
        created_at = datetime.now(UTC)
        return [
            {
                **question.model_dump(),
                "topic": request.topic,
                "topic_id": request.topic_id,
                "language": request.language,
                "position": format_position_for_display(request.position.lower()),
                "position_level": metadata.position_level,
                "job_id": request.job_id,
                "created_at": created_at,
            }
            for question in questions
        ]

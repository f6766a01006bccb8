from __future__ import annotations

import logging

from openai import APIError, APIStatusError, APITimeoutError, AsyncOpenAI, RateLimitError

from question_bank.errors import QuestionGenerationError

logger = logging.getLogger(__name__)


class OpenAIChatClient:
    """Single-turn chat completion client used for question generation."""

    def __init__(
        self,
        api_key: str | None,
        model: str,
        timeout_seconds: float = 60.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(api_key=api_key, timeout=timeout_seconds)
        self._model = model

    async def complete(self, prompt: str, *, temperature: float, max_output_tokens: int) -> str:
        logger.debug("sending generation prompt", extra={"model": self._model, "prompt_chars": len(prompt)})
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_output_tokens,
            )
        except APITimeoutError as exc:
            raise QuestionGenerationError(f"model request timed out: {exc}") from exc
        except RateLimitError as exc:
            raise QuestionGenerationError(f"model rate limit reached: {exc}") from exc
        except APIStatusError as exc:
            raise QuestionGenerationError(f"model request failed with status {exc.status_code}: {exc}") from exc
        except APIError as exc:
            raise QuestionGenerationError(f"model request failed: {exc}") from exc

        if not response.choices or not response.choices[0].message.content:
            raise QuestionGenerationError("model returned an empty completion")
        return response.choices[0].message.content

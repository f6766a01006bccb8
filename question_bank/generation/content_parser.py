from __future__ import annotations

import json
import logging
import re
from typing import Any

from question_bank.contracts import GeneratedQuestion
from question_bank.errors import InvalidGeneratedContentError

logger = logging.getLogger(__name__)

_CODE_BLOCK = re.compile(r"```(?:json|javascript|js)?\s*([\s\S]*?)\s*```")
_DIFFICULTIES = ("easy", "medium", "hard")
_OPTION_COUNT = 4


def parse_generated_content(content: Any, strict: bool = False) -> list[GeneratedQuestion]:
    """Turn raw model output into validated questions.

    Lenient mode repairs what it can (option count, answer index, missing
    explanation/difficulty/category); strict mode rejects instead.
    """

    if not isinstance(content, str) or not content.strip():
        raise InvalidGeneratedContentError("content is empty or not a string")

    text = _strip_code_block(content.strip())
    parsed = _load_json(text, original=content)
    items = _question_items(parsed, strict)
    questions = [_normalize_question(item, index, strict) for index, item in enumerate(items, start=1)]
    logger.debug("parsed generated questions", extra={"question_count": len(questions)})
    return questions


def _strip_code_block(text: str) -> str:
    if "```" not in text:
        return text
    match = _CODE_BLOCK.search(text)
    if match:
        return match.group(1).strip()
    return text.replace("```", "").strip()


def _load_json(text: str, *, original: str) -> Any:
    if text[:1] not in ("[", "{") and "[" in text and "]" in text:
        start, end = text.index("["), text.rindex("]") + 1
        if start < end:
            text = text[start:end]

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        first_error = exc

    decoder = json.JSONDecoder()
    for index, char in enumerate(original):
        if char in "[{":
            try:
                value, _ = decoder.raw_decode(original, index)
                return value
            except json.JSONDecodeError:
                continue
    raise InvalidGeneratedContentError(f"content is not valid JSON ({first_error.msg})")


def _question_items(parsed: Any, strict: bool) -> list[Any]:
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        if isinstance(parsed.get("questions"), list):
            return parsed["questions"]
        items = parsed.get("items")
        if isinstance(items, list) and items and isinstance(items[0], dict) and items[0].get("question"):
            return items
        if parsed.get("question") and not strict:
            return [parsed]
    raise InvalidGeneratedContentError("Generated content is not an array or valid questions object")


def _normalize_question(item: Any, index: int, strict: bool) -> GeneratedQuestion:
    if not isinstance(item, dict) or not item.get("question"):
        raise InvalidGeneratedContentError(f"Question {index} is missing the 'question' field")

    options = item.get("options")
    if not isinstance(options, list):
        raise InvalidGeneratedContentError(f"Question {index} has invalid or missing 'options' array")
    options = [str(option) for option in options]
    if len(options) != _OPTION_COUNT:
        if strict:
            raise InvalidGeneratedContentError(f"Question {index} must have exactly {_OPTION_COUNT} options")
        logger.warning("repairing option count", extra={"question_index": index, "option_count": len(options)})
        while len(options) < _OPTION_COUNT:
            options.append(f"Option {len(options) + 1} (placeholder)")
        options = options[:_OPTION_COUNT]

    correct_answer = _correct_answer(item, index, strict)

    explanation = item.get("explanation")
    if not explanation:
        if strict:
            raise InvalidGeneratedContentError(f"Question {index} is missing the 'explanation' field")
        explanation = f"The correct answer is option {correct_answer + 1}."

    difficulty = str(item.get("difficulty") or "").lower()
    if difficulty not in _DIFFICULTIES:
        if strict:
            raise InvalidGeneratedContentError(
                f"Question {index} has an invalid 'difficulty' (must be easy, medium, or hard)"
            )
        difficulty = "medium"

    category = item.get("category")
    if not category:
        if strict:
            raise InvalidGeneratedContentError(f"Question {index} is missing the 'category' field")
        category = "General"

    return GeneratedQuestion(
        question=str(item["question"]),
        options=options,
        correct_answer=correct_answer,
        explanation=str(explanation),
        difficulty=difficulty,
        category=str(category),
    )


def _correct_answer(item: dict[str, Any], index: int, strict: bool) -> int:
    raw = item.get("correct_answer", item.get("correctAnswer"))
    if isinstance(raw, int) and not isinstance(raw, bool) and 0 <= raw < _OPTION_COUNT:
        return raw
    if strict:
        raise InvalidGeneratedContentError(f"Question {index} has an invalid 'correctAnswer' (must be 0-3)")
    logger.warning("repairing correct answer", extra={"question_index": index, "value": repr(raw)})
    if isinstance(raw, str) and raw.strip().isdigit() and int(raw) < _OPTION_COUNT:
        return int(raw)
    return 0

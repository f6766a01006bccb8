from __future__ import annotations

import json

from question_bank.generation.question_format import QuestionFormat


def construct_prompt(
    template: str,
    question_format: QuestionFormat,
    existing_questions: list[str],
    *,
    topic: str | None,
    language: str | None,
    limit: int,
    difficulty_text: str | None = None,
    position_instruction: str | None = None,
) -> str:
    """Fill the placeholders of a prompt template.

    Plain ``str.replace`` is used because the schema and example are JSON and
    would trip ``str.format`` brace handling.
    """

    topic_instruction = f'the topic of "{topic}"' if topic else "various software development topics"
    language_instruction = f'Focus on the "{language}" programming language. ' if language else ""
    instruction = f"{position_instruction}. " if position_instruction else ""
    existing = "\n".join(f"- {question}" for question in existing_questions) or "- (none)"

    replacements = {
        "{topic}": topic_instruction,
        "{language}": language_instruction,
        "{difficultyText}": difficulty_text or "various difficulty levels",
        "{positionInstruction}": instruction,
        "{limit}": str(limit),
        "{schema}": json.dumps(question_format.schema),
        "{existingQuestions}": existing,
        "{example}": json.dumps(question_format.example, indent=2),
    }
    prompt = template
    for placeholder, value in replacements.items():
        prompt = prompt.replace(placeholder, value)
    return prompt

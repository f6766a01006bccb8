from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class QuestionFormat:
    schema: dict[str, Any]
    example: dict[str, Any]


def load_question_format(config_path: str) -> QuestionFormat:
    parsed = yaml.safe_load(Path(config_path).read_text(encoding="utf-8"))
    if not isinstance(parsed, dict):
        raise ValueError("question format must be a map")

    schema = parsed.get("schema")
    example = parsed.get("example")
    if not isinstance(schema, dict) or not isinstance(example, dict):
        raise ValueError("question format must contain schema and example maps")
    return QuestionFormat(schema=schema, example=example)

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from question_bank.contracts import GenerationRequest
from question_bank.generation.positions import VALID_POSITIONS, is_valid_position


def validate_generation_request(payload: Mapping[str, Any]) -> list[str]:
    """Return human-readable problems with a composed generation payload."""

    errors: list[str] = []
    try:
        GenerationRequest.model_validate(dict(payload))
    except ValidationError as exc:
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"]) or "payload"
            errors.append(f"{location}: {error['msg']}")

    position = payload.get("position")
    if isinstance(position, str) and position and not is_valid_position(position):
        errors.append(f"Position must be one of: {', '.join(VALID_POSITIONS)}")
    return errors

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

VALID_POSITIONS: tuple[str, ...] = ("intern", "fresher", "junior", "middle", "senior", "expert")

_DEFAULT_DIFFICULTY_TEXT = {
    "intern": "basic understanding of programming concepts",
    "fresher": "fundamental programming knowledge",
    "junior": "practical application of programming concepts",
    "middle": "intermediate understanding of software development",
    "senior": "deep understanding of scalable systems and best practices",
    "expert": "advanced architectural thinking and system design expertise",
}

_DEFAULT_POSITION_INSTRUCTION = {
    "intern": "suitable for an intern-level candidate",
    "fresher": "appropriate for a fresher with limited experience",
    "junior": "targeted at a junior developer with some experience",
    "middle": "designed for a mid-level developer with solid experience",
    "senior": "targeted at a senior developer with extensive experience",
    "expert": "challenging for expert-level developers and architects",
}

_DEFAULT_POSITION_LEVELS = {position: level for level, position in enumerate(VALID_POSITIONS, start=1)}

_GENERIC_DIFFICULTY_TEXT = "various difficulty levels"
_GENERIC_POSITION_INSTRUCTION = "suitable for developers of different experience levels"
_GENERIC_POSITION_LEVEL = 3


@dataclass(frozen=True)
class PositionMetadata:
    difficulty_text: str
    position_instruction: str
    position_level: int


def is_valid_position(position: str | None) -> bool:
    return bool(position) and position.lower() in VALID_POSITIONS


def format_position_for_display(position: str) -> str:
    return position[:1].upper() + position[1:]


def get_position_metadata(position: str, environ: Mapping[str, str] | None = None) -> PositionMetadata:
    """Resolve prompt calibration for a position.

    ``POSITION_DIFFICULTY_TEXT_<POS>``, ``POSITION_INSTRUCTION_<POS>`` and
    ``POSITION_LEVEL_<POS>`` override the built-in defaults. Unknown positions
    fall back to junior-level generic values.
    """

    env = os.environ if environ is None else environ
    slug = position.lower()
    suffix = slug.upper()

    difficulty_text = env.get(f"POSITION_DIFFICULTY_TEXT_{suffix}") or _DEFAULT_DIFFICULTY_TEXT.get(slug)
    instruction = env.get(f"POSITION_INSTRUCTION_{suffix}") or _DEFAULT_POSITION_INSTRUCTION.get(slug)
    if difficulty_text is None or instruction is None:
        logger.warning("no position metadata found, using generic values", extra={"position": slug})

    return PositionMetadata(
        difficulty_text=difficulty_text or _GENERIC_DIFFICULTY_TEXT,
        position_instruction=instruction or _GENERIC_POSITION_INSTRUCTION,
        position_level=_position_level(slug, env),
    )


def _position_level(slug: str, env: Mapping[str, str]) -> int:
    env_name = f"POSITION_LEVEL_{slug.upper()}"
    raw = env.get(env_name)
    if raw:
        try:
            return int(raw)
        except ValueError:
            logger.warning("invalid position level override, using default", extra={"env_var": env_name, "value": raw})
    return _DEFAULT_POSITION_LEVELS.get(slug, _GENERIC_POSITION_LEVEL)

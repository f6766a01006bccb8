from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class AuditLog:
    """Append-only JSON-lines audit files, one file per named target."""

    def __init__(self, log_dir: str) -> None:
        self._log_dir = Path(log_dir)

    async def append(self, target: str, message: str, data: dict[str, Any] | None = None) -> None:
        record = {
            "logged_at": datetime.now(UTC).isoformat(),
            "message": message,
            "data": data or {},
        }
        line = json.dumps(record, default=str)
        await asyncio.to_thread(self._write_line, target, line)

    def _write_line(self, target: str, line: str) -> None:
        self._log_dir.mkdir(parents=True, exist_ok=True)
        with (self._log_dir / target).open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


async def run_best_effort(operation: Awaitable[Any], *, description: str) -> bool:
    """Await a non-critical side effect; failures are logged and suppressed.

    Returns ``True`` when the side effect completed.
    """

    try:
        await operation
        return True
    except Exception:  # noqa: BLE001
        logger.warning("best-effort side effect failed", extra={"side_effect": description}, exc_info=True)
        return False

"""Structured JSONL audit log utilities."""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class SearchEvent:
    """Sanitized representation of a single search run."""

    timestamp: str
    run_id: str
    ok: bool
    error_code: str | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Sanitize arguments so query text never reaches the log."""
    sanitized: dict[str, object] = {}
    for key in sorted(arguments.keys()):
        value = arguments[key]
        if key in {"filename", "audit_log"} and isinstance(value, str):
            sanitized[key] = value
            continue
        if key == "query" and isinstance(value, str):
            sanitized["query_present"] = bool(value)
            sanitized["query_length"] = len(value)
            continue
        if isinstance(value, (int, float, bool)) or value is None:
            sanitized[key] = value
            continue
        if isinstance(value, str):
            sanitized[f"{key}_present"] = True
            sanitized[f"{key}_length"] = len(value)
            continue
        sanitized[f"{key}_type"] = type(value).__name__
    return sanitized


class JsonlAuditLogger:
    """Append-only JSONL record of search runs."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.touch(exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: SearchEvent) -> None:
        """Append an event as one JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")

    def record_run(
        self,
        arguments: dict[str, object],
        ok: bool,
        error_code: str | None = None,
    ) -> SearchEvent:
        """Sanitize run arguments, append them under a fresh run id and return the event."""
        event = SearchEvent(
            timestamp=utc_timestamp(),
            run_id=f"run-{uuid.uuid4().hex[:12]}",
            ok=ok,
            error_code=error_code,
            metadata=sanitize_arguments(arguments),
        )
        self.append(event)
        return event

"""JSONL compile log used as the learning/memory record for compiled commands.

Each compiled request produces one ``CompileRecord`` holding the raw input, a
short summary, and an outcome label (``success`` when the compile confidence
beats the threshold, ``partial`` otherwise). Text fields are scrubbed for PII
before they reach disk and the file rotates once it exceeds ``max_bytes``.
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple

OUTCOME_SUCCESS = "success"
OUTCOME_PARTIAL = "partial"
DEFAULT_SUCCESS_THRESHOLD = 0.7

_KNOWN_PATTERNS: Dict[str, Pattern[str]] = {
    "email": re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE),
    "phone": re.compile(r"(?:\+?\d[\d\s\-().]{6,}\d)"),
    "credit_card": re.compile(r"\b(?:\d[ -]*){13,19}\b"),
    "gov_id": re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),
    "url": re.compile(r"https?://[^\s]+", re.IGNORECASE),
}
# Applied lowest first; card and gov-id shapes must run before phone.
_PATTERN_PRIORITY: Dict[str, int] = {
    "credit_card": 0,
    "gov_id": 1,
    "email": 2,
    "phone": 3,
    "url": 4,
}
_REDACT_FIELDS = {"user_text", "summary", "metadata"}


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def outcome_for(confidence: float, threshold: float = DEFAULT_SUCCESS_THRESHOLD) -> str:
    return OUTCOME_SUCCESS if confidence > threshold else OUTCOME_PARTIAL


@dataclass
class CompileRecord:
    """One compiled request as seen by the learning collaborator."""

    timestamp: str
    session_id: str
    user_text: str
    summary: str
    outcome: str
    intent: str
    confidence: float
    complexity: str
    step_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def new(
        cls,
        *,
        session_id: str,
        user_text: str,
        summary: str,
        outcome: str,
        intent: str,
        confidence: float,
        complexity: str,
        step_count: int = 0,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "CompileRecord":
        return cls(
            timestamp=_utc_now(),
            session_id=session_id,
            user_text=user_text,
            summary=summary,
            outcome=outcome,
            intent=intent,
            confidence=confidence,
            complexity=complexity,
            step_count=step_count,
            metadata=dict(metadata or {}),
        )


class LearningLogger:
    """Append ``CompileRecord`` rows to a JSONL file with redaction + rotation."""

    def __init__(
        self,
        *,
        log_path: Path,
        enabled: bool = True,
        redact: bool = True,
        patterns: Iterable[str] | None = None,
        max_bytes: int = 0,
        backup_count: int = 0,
    ) -> None:
        self._log_path = Path(log_path)
        self._enabled = enabled
        self._redact = redact
        self._max_bytes = max_bytes
        self._backup_count = backup_count
        selected = tuple(patterns) if patterns else tuple(_KNOWN_PATTERNS)
        ordered = sorted(
            (key for key in selected if key in _KNOWN_PATTERNS),
            key=lambda key: _PATTERN_PRIORITY.get(key, 10),
        )
        self._redaction_patterns: List[Tuple[str, Pattern[str]]] = [(key, _KNOWN_PATTERNS[key]) for key in ordered]

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def log_path(self) -> Path:
        return self._log_path

    def log_compile(self, record: CompileRecord) -> None:
        if not self._enabled:
            return
        self._append_json_line(asdict(record))

    def _append_json_line(self, payload: Dict[str, Any]) -> None:
        path = self._log_path
        path.parent.mkdir(parents=True, exist_ok=True)
        # ASCII escapes keep lone surrogates from reaching the UTF-8 encoder.
        line = json.dumps(self._prepare_payload(payload), ensure_ascii=True)
        self._rotate_if_needed(path, len(line.encode("utf-8")) + 1)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line)
            handle.write("\n")

    def _prepare_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self._redact or not self._redaction_patterns:
            return payload
        return {
            key: self._scrub_value(value) if key in _REDACT_FIELDS else value
            for key, value in payload.items()
        }

    def _scrub_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: self._scrub_value(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._scrub_value(item) for item in value]
        if isinstance(value, str):
            return self._scrub_string(value)
        return value

    def _scrub_string(self, value: str) -> str:
        for key, pattern in self._redaction_patterns:
            value = pattern.sub(f"[REDACTED_{key.upper()}]", value)
        return value

    def _rotate_if_needed(self, path: Path, incoming_bytes: int) -> None:
        """Shift ``log.N`` → ``log.N+1`` and move the live file to ``log.1`` when full."""
        if self._max_bytes <= 0 or not path.exists():
            return
        if path.stat().st_size + incoming_bytes <= self._max_bytes:
            return

        if self._backup_count <= 0:
            path.unlink()
            return

        for index in range(self._backup_count - 1, 0, -1):
            source = Path(f"{path}.{index}")
            if source.exists():
                source.replace(Path(f"{path}.{index + 1}"))
        path.replace(Path(f"{path}.1"))


__all__ = [
    "CompileRecord",
    "DEFAULT_SUCCESS_THRESHOLD",
    "LearningLogger",
    "OUTCOME_PARTIAL",
    "OUTCOME_SUCCESS",
    "outcome_for",
]

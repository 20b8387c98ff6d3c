"""Entry-point wrapper around the command compiler.

CLI, HTTP and eval callers all go through ``CommandService`` so the
compile → record → annotate sequence is identical everywhere. The session
token is opaque here: it is only copied onto the learning record.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.command_parser import compile_command, summarize_command
from core.learning_logger import DEFAULT_SUCCESS_THRESHOLD, CompileRecord, LearningLogger, outcome_for
from core.parsers.types import ParsedCommand

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "current-session"


class CommandService:
    """Compile admin requests and hand a summary to the learning log."""

    def __init__(
        self,
        *,
        success_threshold: float = DEFAULT_SUCCESS_THRESHOLD,
        learning_logger: Optional[LearningLogger] = None,
    ) -> None:
        self._success_threshold = success_threshold
        self._learning_logger = learning_logger

    @property
    def success_threshold(self) -> float:
        return self._success_threshold

    # WHAT: compile one request and record its outcome.
    # HOW: the learning write is fire-and-forget; a failing write is logged and the
    #      compiled command is still returned.
    def compile(self, message: str, session_token: Optional[str] = None) -> ParsedCommand:
        command = compile_command(message)
        self._record(command, session_token or DEFAULT_SESSION_ID)
        return command

    def is_confident(self, command: ParsedCommand) -> bool:
        return command.confidence > self._success_threshold

    def outcome(self, command: ParsedCommand) -> str:
        return outcome_for(command.confidence, self._success_threshold)

    # WHAT: metadata for dashboards/logs describing a compiled command.
    # HOW: flatten the parts reviewers filter on (intent, risk, plan size, schedule).
    def build_metadata(self, command: ParsedCommand) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {
            "intent": command.intent.primary,
            "urgency": command.intent.urgency,
            "complexity": command.complexity,
            "verbs": sorted({action.verb for action in command.actions}),
            "high_risk": any(action.risk_level == "high" for action in command.actions),
            "step_count": len(command.execution_plan),
            "condition_count": len(command.conditions),
        }
        if command.intent.secondary:
            metadata["secondary_intent"] = command.intent.secondary
        if command.schedule is not None:
            metadata["schedule"] = command.schedule.frequency
        return metadata

    def _record(self, command: ParsedCommand, session_id: str) -> None:
        if not self._learning_logger or not self._learning_logger.enabled:
            return
        record = CompileRecord.new(
            session_id=session_id,
            user_text=command.original_input,
            summary=summarize_command(command),
            outcome=self.outcome(command),
            intent=command.intent.primary,
            confidence=command.confidence,
            complexity=command.complexity,
            step_count=len(command.execution_plan),
            metadata=self.build_metadata(command),
        )
        try:
            self._learning_logger.log_compile(record)
        except Exception as exc:  # noqa: BLE001 - recording never fails a compile
            logger.warning("Failed to record compiled command for session %s: %s", session_id, exc)


__all__ = ["CommandService", "DEFAULT_SESSION_ID"]

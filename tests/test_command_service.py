import json
import logging

from core.command_service import DEFAULT_SESSION_ID, CommandService
from core.learning_logger import LearningLogger


class FailingLogger(LearningLogger):
    def log_compile(self, record) -> None:
        raise OSError("disk full")


def test_compile_records_summary_and_outcome(tmp_path):
    log_path = tmp_path / "compiles.jsonl"
    service = CommandService(learning_logger=LearningLogger(log_path=log_path, redact=False))

    command = service.compile("delete all inactive users", session_token="abc123")

    assert command.intent.primary == "management"
    row = json.loads(log_path.read_text(encoding="utf-8").strip())
    assert row["session_id"] == "abc123"
    assert row["summary"] == "Intent: management, Entities: 1, Actions: 1"
    assert row["outcome"] == "success"
    assert row["complexity"] == "moderate"
    assert row["step_count"] == 2
    assert row["metadata"]["high_risk"] is True


def test_missing_session_token_uses_default(tmp_path):
    log_path = tmp_path / "compiles.jsonl"
    service = CommandService(learning_logger=LearningLogger(log_path=log_path, redact=False))

    service.compile("hello")

    row = json.loads(log_path.read_text(encoding="utf-8").strip())
    assert row["session_id"] == DEFAULT_SESSION_ID
    assert row["outcome"] == "partial"


def test_failed_record_does_not_break_compile(tmp_path, caplog):
    service = CommandService(learning_logger=FailingLogger(log_path=tmp_path / "compiles.jsonl"))

    with caplog.at_level(logging.WARNING, logger="core.command_service"):
        command = service.compile("delete all inactive users")

    assert command.actions[0].verb == "delete"
    assert "disk full" in caplog.text


class BrokenLogger(LearningLogger):
    def log_compile(self, record) -> None:
        raise ValueError("unencodable record")


def test_any_record_error_is_swallowed(tmp_path, caplog):
    service = CommandService(learning_logger=BrokenLogger(log_path=tmp_path / "compiles.jsonl"))

    with caplog.at_level(logging.WARNING, logger="core.command_service"):
        command = service.compile("hello")

    assert command.intent.primary == "query"
    assert "unencodable record" in caplog.text


def test_lone_surrogate_input_is_recorded(tmp_path):
    log_path = tmp_path / "compiles.jsonl"
    service = CommandService(learning_logger=LearningLogger(log_path=log_path))

    command = service.compile("delete all inactive users \ud800")

    assert command.actions[0].verb == "delete"
    row = json.loads(log_path.read_text(encoding="utf-8").strip())
    assert row["user_text"] == "delete all inactive users \ud800"


def test_service_without_logger() -> None:
    service = CommandService()
    command = service.compile("hello")
    assert service.outcome(command) == "partial"
    assert not service.is_confident(command)


def test_custom_success_threshold() -> None:
    service = CommandService(success_threshold=0.4)
    command = service.compile("hello")
    assert service.is_confident(command)
    assert service.outcome(command) == "success"


def test_build_metadata() -> None:
    service = CommandService()
    command = service.compile("if risk is high then disable the user")
    metadata = service.build_metadata(command)
    assert metadata == {
        "intent": "automation",
        "urgency": "medium",
        "complexity": "complex",
        "verbs": ["disable"],
        "high_risk": True,
        "step_count": 3,
        "condition_count": 1,
    }


def test_build_metadata_includes_schedule_and_secondary() -> None:
    service = CommandService()
    metadata = service.build_metadata(service.compile("send a weekly report to the security team"))
    assert metadata["schedule"] == "weekly"
    assert metadata["secondary_intent"] == "reporting"

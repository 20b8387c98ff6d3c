"""Assemble the command service and run the interactive CLI loop."""

from __future__ import annotations

import json
import logging

from app.config import (
    get_compile_log_path,
    get_log_backup_count,
    get_log_level,
    get_log_max_bytes,
    get_log_redaction_patterns,
    get_success_threshold,
    is_compile_log_enabled,
    is_log_redaction_enabled,
)
from core.command_parser import parsing_insights
from core.command_service import CommandService
from core.learning_logger import LearningLogger


# -- Service construction ------------------------------------------------------
def build_service() -> CommandService:
    """Wire the compiler and its compile log from ``app.config`` settings.

    Every entry point (CLI, web API, eval suite) shares this wiring so behavior
    stays reproducible across environments.
    """
    learning_logger = LearningLogger(
        log_path=get_compile_log_path(),
        enabled=is_compile_log_enabled(),
        redact=is_log_redaction_enabled(),
        patterns=get_log_redaction_patterns(),
        max_bytes=get_log_max_bytes(),
        backup_count=get_log_backup_count(),
    )
    return CommandService(success_threshold=get_success_threshold(), learning_logger=learning_logger)


def render_command(service: CommandService, message: str) -> str:
    command = service.compile(message)
    payload = {
        "command": command.to_dict(),
        "insights": parsing_insights(command),
        "outcome": service.outcome(command),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


# -- Interactive CLI loop ------------------------------------------------------
def main() -> None:
    """Read admin requests from stdin and print the compiled plan as JSON."""
    logging.basicConfig(level=get_log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    service = build_service()
    print("Command compiler ready. Type 'quit' or 'exit' to stop.")

    while True:
        try:
            message = input("Request: ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if message.strip().lower() in {"quit", "exit"}:
            print("Goodbye!")
            break
        if not message.strip():
            continue

        print()
        print(render_command(service, message))
        print()


if __name__ == "__main__":
    main()

"""Compile free-form admin requests into risk-scored execution plans."""

from __future__ import annotations

import logging
from typing import List

from core.execution_plan import build_execution_plan
from core.parsers import actions as action_parser
from core.parsers import conditions as condition_parser
from core.parsers import entities as entity_parser
from core.parsers import intent as intent_parser
from core.parsers import schedule as schedule_parser
from core.parsers.types import ParsedCommand
from core.scoring import assess_complexity, calculate_confidence

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_THRESHOLD = 0.7


def compile_command(message: str) -> ParsedCommand:
    """Run every extractor over ``message`` and assemble a ``ParsedCommand``.

    WHAT: intent, entities, actions, conditions and schedule are extracted
    independently, then scored and compiled into an execution plan.
    WHY: the plan executor and the review tooling consume one immutable object
    per request.
    HOW: extractors only read the shared pattern catalog, so the result is a
    pure function of the text. Unmatched input degrades to an empty command
    (query intent, no entities/actions/conditions, baseline confidence).
    """
    text = message or ""

    intent = intent_parser.classify(text)
    entities = entity_parser.extract(text)
    actions = action_parser.extract(text)
    conditions = condition_parser.extract(text)
    schedule = schedule_parser.extract(text)

    complexity = assess_complexity(intent, entities, actions, conditions, schedule)
    execution_plan = build_execution_plan(actions, entities, conditions)
    confidence = calculate_confidence(intent, entities, actions)

    logger.debug(
        "Compiled command intent=%s entities=%d actions=%d conditions=%d steps=%d confidence=%.2f",
        intent.primary,
        len(entities),
        len(actions),
        len(conditions),
        len(execution_plan),
        confidence,
    )

    return ParsedCommand(
        intent=intent,
        entities=tuple(entities),
        actions=tuple(actions),
        conditions=tuple(conditions),
        schedule=schedule,
        complexity=complexity,
        confidence=confidence,
        original_input=text,
        execution_plan=tuple(execution_plan),
    )


def summarize_command(command: ParsedCommand) -> str:
    return (
        f"Intent: {command.intent.primary}, "
        f"Entities: {len(command.entities)}, "
        f"Actions: {len(command.actions)}"
    )


def parsing_insights(command: ParsedCommand) -> List[str]:
    """Human-readable warnings shown next to a compiled plan."""
    insights: List[str] = []
    if command.complexity == "enterprise":
        insights.append("This is a complex enterprise-level operation that may require approval.")
    if any(action.risk_level == "high" for action in command.actions):
        insights.append("High-risk operations detected. Additional validation recommended.")
    if command.schedule is not None:
        insights.append(f"Scheduled operation: {command.schedule.frequency}")
    if command.confidence < LOW_CONFIDENCE_THRESHOLD:
        insights.append("Low confidence parsing. Please verify the interpretation is correct.")
    return insights


__all__ = ["compile_command", "parsing_insights", "summarize_command", "ParsedCommand"]

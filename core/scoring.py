"""Complexity and confidence scoring for compiled commands."""

from __future__ import annotations

from typing import Optional, Sequence

from core.parsers.types import Action, Condition, Entity, Intent, Schedule

_INTENT_BASE = {
    "query": 1,
    "management": 2,
    "automation": 3,
    "analysis": 4,
}

# Upper bounds (inclusive) per level; anything above the last bound is enterprise.
_COMPLEXITY_THRESHOLDS = (
    (3, "simple"),
    (8, "moderate"),
    (15, "complex"),
)

BASE_CONFIDENCE = 0.5


def complexity_score(
    intent: Intent,
    entities: Sequence[Entity],
    actions: Sequence[Action],
    conditions: Sequence[Condition],
    schedule: Optional[Schedule] = None,
) -> int:
    """Sum the weighted contributions of every extracted component.

    ``reporting`` has no base weight and contributes 0.
    """

    score = _INTENT_BASE.get(intent.category, 0)

    score += len(entities)
    if any(entity.attributes.get("hasFilters") for entity in entities):
        score += 2

    score += 2 * len(actions)
    if any(action.risk_level == "high" for action in actions):
        score += 3
    if any(action.dependencies for action in actions):
        score += 2

    score += 2 * len(conditions)

    if schedule is not None and schedule.frequency != "once":
        score += 2
    return score


def complexity_level(score: int) -> str:
    for bound, level in _COMPLEXITY_THRESHOLDS:
        if score <= bound:
            return level
    return "enterprise"


def assess_complexity(
    intent: Intent,
    entities: Sequence[Entity],
    actions: Sequence[Action],
    conditions: Sequence[Condition],
    schedule: Optional[Schedule] = None,
) -> str:
    return complexity_level(complexity_score(intent, entities, actions, conditions, schedule))


def calculate_confidence(intent: Intent, entities: Sequence[Entity], actions: Sequence[Action]) -> float:
    confidence = BASE_CONFIDENCE
    if intent.primary != "query":
        confidence += 0.1
    if intent.urgency == "critical":
        confidence += 0.1

    if entities:
        mean_entity_confidence = sum(entity.confidence for entity in entities) / len(entities)
        confidence += 0.3 * mean_entity_confidence

    if actions:
        confidence += 0.2
        if all(action.risk_level != "high" for action in actions):
            confidence += 0.1
    return min(confidence, 1.0)


__all__ = ["assess_complexity", "calculate_confidence", "complexity_level", "complexity_score"]

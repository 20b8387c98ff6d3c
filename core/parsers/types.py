"""Shared dataclasses for compiled command outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

INTENT_CATEGORIES = ("query", "automation", "management", "analysis", "reporting")
URGENCY_LEVELS = ("low", "medium", "high", "critical")
COMPLEXITY_LEVELS = ("simple", "moderate", "complex", "enterprise")
RISK_LEVELS = ("low", "medium", "high")


def _freeze(value: Any) -> Any:
    """Read-only view of nested mappings/lists so returned commands cannot be edited."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class Intent:
    primary: str = "query"
    category: str = "query"
    urgency: str = "medium"
    secondary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "primary": self.primary,
            "category": self.category,
            "urgency": self.urgency,
        }
        if self.secondary is not None:
            payload["secondary"] = self.secondary
        return payload


@dataclass(frozen=True)
class Entity:
    type: str
    value: str
    confidence: float
    context: str = ""
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "value": self.value,
            "confidence": self.confidence,
            "context": self.context,
            "attributes": _thaw(self.attributes),
        }


@dataclass(frozen=True)
class Action:
    verb: str
    target: str
    parameters: Mapping[str, Any] = field(default_factory=dict)
    dependencies: Tuple[str, ...] = ()
    risk_level: str = "low"
    reversible: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", _freeze(self.parameters))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verb": self.verb,
            "target": self.target,
            "parameters": _thaw(self.parameters),
            "dependencies": list(self.dependencies),
            "riskLevel": self.risk_level,
            "reversible": self.reversible,
        }


@dataclass(frozen=True)
class Condition:
    type: str
    field: str
    operator: str
    value: str
    logical_operator: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type,
            "field": self.field,
            "operator": self.operator,
            "value": self.value,
        }
        if self.logical_operator is not None:
            payload["logicalOperator"] = self.logical_operator
        return payload


@dataclass(frozen=True)
class Schedule:
    frequency: str
    day_of_week: Optional[str] = None
    time: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"frequency": self.frequency}
        if self.day_of_week is not None:
            payload["dayOfWeek"] = self.day_of_week
        if self.time is not None:
            payload["time"] = self.time
        return payload


@dataclass(frozen=True)
class ExecutionStep:
    """One planned call against the directory service."""

    step_id: str
    description: str
    service: str
    endpoint: str
    method: str
    parameters: Mapping[str, Any] = field(default_factory=dict)
    depends_on: Tuple[str, ...] = ()
    estimated_duration: int = 0
    rollback: Optional["ExecutionStep"] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", _freeze(self.parameters))

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "stepId": self.step_id,
            "description": self.description,
            "service": self.service,
            "endpoint": self.endpoint,
            "method": self.method,
            "parameters": _thaw(self.parameters),
            "dependsOn": list(self.depends_on),
            "estimatedDuration": self.estimated_duration,
        }
        if self.rollback is not None:
            payload["rollback"] = self.rollback.to_dict()
        return payload


@dataclass(frozen=True)
class ParsedCommand:
    """Full structured result of compiling one natural-language request."""

    intent: Intent
    entities: Tuple[Entity, ...]
    actions: Tuple[Action, ...]
    conditions: Tuple[Condition, ...]
    complexity: str
    confidence: float
    original_input: str
    execution_plan: Tuple[ExecutionStep, ...]
    schedule: Optional[Schedule] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "intent": self.intent.to_dict(),
            "entities": [entity.to_dict() for entity in self.entities],
            "actions": [action.to_dict() for action in self.actions],
            "conditions": [condition.to_dict() for condition in self.conditions],
            "complexity": self.complexity,
            "confidence": self.confidence,
            "originalInput": self.original_input,
            "executionPlan": [step.to_dict() for step in self.execution_plan],
        }
        if self.schedule is not None:
            payload["schedule"] = self.schedule.to_dict()
        return payload


__all__ = [
    "Action",
    "COMPLEXITY_LEVELS",
    "Condition",
    "Entity",
    "ExecutionStep",
    "INTENT_CATEGORIES",
    "Intent",
    "ParsedCommand",
    "RISK_LEVELS",
    "Schedule",
    "URGENCY_LEVELS",
]

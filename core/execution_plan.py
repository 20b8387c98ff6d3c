"""Compile extracted actions and conditions into an ordered execution plan.

Every ``(verb, target)`` pair resolves to exactly one ``ServiceCall`` through
``SERVICE_MAPPINGS``; pairs missing from the table fall back to a generic
``/{target}`` call, so plan generation never fails. Post-processing puts the
shared validation step (when any action is high risk) ahead of the action
steps and the condition checks ahead of everything, in reverse extraction
order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from core.parsers.types import Action, Condition, Entity, ExecutionStep


@dataclass(frozen=True)
class ServiceCall:
    service: str
    endpoint: str
    method: str


_USERS = "Microsoft Graph - Users"
_GROUPS = "Microsoft Graph - Groups"
_POLICIES = "Microsoft Graph - Policies"
_INTUNE = "Microsoft Intune"

_USER_COLLECTION = "/users"
_USER_ITEM = "/users/{id}"
_GROUP_COLLECTION = "/groups"
_GROUP_ITEM = "/groups/{id}"
_DEVICE_COLLECTION = "/deviceManagement/managedDevices"
_DEVICE_ITEM = "/deviceManagement/managedDevices/{id}"
_POLICY_COLLECTION = "/identity/conditionalAccess/policies"
_POLICY_ITEM = "/identity/conditionalAccess/policies/{id}"

SERVICE_MAPPINGS: Dict[str, Dict[str, ServiceCall]] = {
    "create": {
        "user": ServiceCall(_USERS, _USER_COLLECTION, "POST"),
        "group": ServiceCall(_GROUPS, _GROUP_COLLECTION, "POST"),
        "device": ServiceCall(_INTUNE, _DEVICE_COLLECTION, "POST"),
        "policy": ServiceCall(_POLICIES, _POLICY_COLLECTION, "POST"),
    },
    "read": {
        "user": ServiceCall(_USERS, _USER_COLLECTION, "GET"),
        "group": ServiceCall(_GROUPS, _GROUP_COLLECTION, "GET"),
        "device": ServiceCall(_INTUNE, _DEVICE_COLLECTION, "GET"),
        "policy": ServiceCall(_POLICIES, _POLICY_COLLECTION, "GET"),
    },
    "update": {
        "user": ServiceCall(_USERS, _USER_ITEM, "PATCH"),
        "group": ServiceCall(_GROUPS, _GROUP_ITEM, "PATCH"),
        "device": ServiceCall(_INTUNE, _DEVICE_ITEM, "PATCH"),
        "policy": ServiceCall(_POLICIES, _POLICY_ITEM, "PATCH"),
    },
    "delete": {
        "user": ServiceCall(_USERS, _USER_ITEM, "DELETE"),
        "group": ServiceCall(_GROUPS, _GROUP_ITEM, "DELETE"),
        "device": ServiceCall(_INTUNE, _DEVICE_ITEM, "DELETE"),
        "policy": ServiceCall(_POLICIES, _POLICY_ITEM, "DELETE"),
    },
}

FALLBACK_SERVICE = "Microsoft Graph"
_READ_VERBS = {"read"}

_BASE_DURATIONS = {
    "read": 10,
    "create": 30,
    "update": 20,
    "delete": 15,
    "assign": 25,
}
_DEFAULT_DURATION = 20

# update has no stored "before" state, so its rollback is another update.
ROLLBACK_VERBS = {
    "create": "delete",
    "update": "update",
    "assign": "revoke",
    "enable": "disable",
    "disable": "enable",
}
ROLLBACK_SERVICE = "Microsoft Graph - Rollback"
ROLLBACK_ENDPOINT = "/rollback"
_ROLLBACK_DURATION = 15

_IDENTIFIER_FIELDS = {
    "user": "userPrincipalName",
    "group": "displayName",
}

_CONDITION_ENDPOINTS = {
    "status": "/users",
    "location": "/users",
    "department": "/users",
    "count": "/users/$count",
    "risk": "/identityProtection/riskyUsers",
}
_CONDITION_FILTERS = {
    "equals": "{field} eq '{value}'",
    "in": "{field} eq '{value}'",
    "greater_than": "{field} gt {value}",
    "less_than": "{field} lt {value}",
}
_CONDITION_DURATION = 10

VALIDATION_STEP_ID = "validation-1"


def map_action_to_service(verb: str, target: str) -> ServiceCall:
    mapped = SERVICE_MAPPINGS.get(verb, {}).get(target)
    if mapped is not None:
        return mapped
    method = "GET" if verb in _READ_VERBS else "POST"
    return ServiceCall(FALLBACK_SERVICE, f"/{target}", method)


def estimate_duration(action: Action) -> int:
    duration = _BASE_DURATIONS.get(action.verb, _DEFAULT_DURATION)
    if action.risk_level == "high":
        duration += 10
    duration += 5 * len(action.dependencies)
    return duration


def build_action_parameters(action: Action, entities: Sequence[Entity]) -> Dict[str, Any]:
    """Merge action parameters with every entity's attributes; later entities win."""

    parameters: Dict[str, Any] = dict(action.parameters)
    identifier_field = _IDENTIFIER_FIELDS.get(action.target)
    for entity in entities:
        if identifier_field and entity.type == action.target:
            parameters[identifier_field] = entity.value
        parameters.update(entity.attributes)
    return parameters


def build_rollback_step(action: Action) -> Optional[ExecutionStep]:
    """Undo step for a reversible action, sent to the shared rollback endpoint."""
    if not action.reversible:
        return None
    rollback_verb = ROLLBACK_VERBS.get(action.verb)
    if rollback_verb is None:
        return None
    return ExecutionStep(
        step_id=f"rollback-{action.verb}",
        description=f"Rollback {action.verb} operation",
        service=ROLLBACK_SERVICE,
        endpoint=ROLLBACK_ENDPOINT,
        method="POST",
        parameters={"originalAction": action.to_dict(), "rollbackVerb": rollback_verb},
        depends_on=(),
        estimated_duration=_ROLLBACK_DURATION,
    )


def build_action_step(action: Action, entities: Sequence[Entity], step_number: int) -> ExecutionStep:
    call = map_action_to_service(action.verb, action.target)
    return ExecutionStep(
        step_id=f"step-{step_number}",
        description=f"{action.verb} {action.target} with specified parameters",
        service=call.service,
        endpoint=call.endpoint,
        method=call.method,
        parameters=build_action_parameters(action, entities),
        depends_on=tuple(action.dependencies),
        estimated_duration=estimate_duration(action),
        rollback=build_rollback_step(action),
    )


def build_validation_step() -> ExecutionStep:
    return ExecutionStep(
        step_id=VALIDATION_STEP_ID,
        description="Validate high-risk operation permissions and prerequisites",
        service="Microsoft Graph - Validation",
        endpoint="/me/checkMemberGroups",
        method="POST",
        parameters={"groupIds": ["admin-role-check"]},
        depends_on=(),
        estimated_duration=30,
    )


def build_condition_step(condition: Condition, step_number: int) -> ExecutionStep:
    parameters: Dict[str, Any] = {}
    template = _CONDITION_FILTERS.get(condition.operator)
    if template:
        parameters["$filter"] = template.format(field=condition.field, value=condition.value)
    return ExecutionStep(
        step_id=f"condition-{step_number}",
        description=f"Check condition: {condition.field} {condition.operator} {condition.value}",
        service="Microsoft Graph - Query",
        endpoint=_CONDITION_ENDPOINTS.get(condition.field, "/query"),
        method="GET",
        parameters=parameters,
        depends_on=(),
        estimated_duration=_CONDITION_DURATION,
    )


def build_execution_plan(
    actions: Sequence[Action],
    entities: Sequence[Entity],
    conditions: Sequence[Condition],
) -> List[ExecutionStep]:
    plan: List[ExecutionStep] = []
    step_number = 1
    for action in actions:
        plan.append(build_action_step(action, entities, step_number))
        step_number += 1

    if any(action.risk_level == "high" for action in actions):
        plan.insert(0, build_validation_step())

    # Each check goes to the front, so the last condition ends up first.
    for condition in conditions:
        plan.insert(0, build_condition_step(condition, step_number))
        step_number += 1

    return plan


__all__ = [
    "FALLBACK_SERVICE",
    "ROLLBACK_ENDPOINT",
    "ROLLBACK_SERVICE",
    "ROLLBACK_VERBS",
    "SERVICE_MAPPINGS",
    "ServiceCall",
    "VALIDATION_STEP_ID",
    "build_action_parameters",
    "build_action_step",
    "build_condition_step",
    "build_execution_plan",
    "build_rollback_step",
    "build_validation_step",
    "estimate_duration",
    "map_action_to_service",
]

from __future__ import annotations

import pytest

from core.parsers.actions import (
    CONDITIONAL_EXECUTION,
    SEQUENTIAL_EXECUTION,
    UNKNOWN_TARGET,
    assess_risk,
    extract,
    extract_parameters,
    find_dependencies,
    find_target,
    is_reversible,
)


def test_extract_single_destructive_action() -> None:
    actions = extract("delete all inactive users")
    assert len(actions) == 1
    action = actions[0]
    assert action.verb == "delete"
    assert action.target == "user"
    assert action.risk_level == "high"
    assert action.reversible is False
    assert action.parameters == {"status": "inactive"}
    assert action.dependencies == ()


def test_shared_synonym_yields_one_action_per_category() -> None:
    actions = extract("remove the user")
    assert [action.verb for action in actions] == ["delete", "revoke"]
    assert all(action.target == "user" for action in actions)


def test_target_falls_back_to_next_word() -> None:
    assert find_target("create", "create mailbox for finance") == "mailbox"


def test_target_unknown_when_verb_is_last_word() -> None:
    assert find_target("delete", "please delete") == UNKNOWN_TARGET
    assert find_target("delete", "nothing here") == UNKNOWN_TARGET


def test_target_uses_entity_type_within_three_words() -> None:
    assert find_target("grant", "grant admin role to guest users") == "role"
    assert find_target("disable", "disable the old laptop") == "device"


def test_parameters_capture_first_group() -> None:
    parameters = extract_parameters("Show 25 disabled accounts in Sales over the last 30 days")
    assert parameters["count"] == "25"
    assert parameters["status"] == "disabled"
    assert parameters["department"] == "Sales"
    assert parameters["timeframe"] == "last 30 days"
    assert parameters["location"] == "Sales over the last"


def test_dependencies_from_keywords() -> None:
    assert find_dependencies("create the group then add users") == (SEQUENTIAL_EXECUTION,)
    assert find_dependencies("if risk is high then disable the user") == (
        SEQUENTIAL_EXECUTION,
        CONDITIONAL_EXECUTION,
    )
    assert find_dependencies("list users") == ()


@pytest.mark.parametrize(
    "verb, target, expected",
    [
        ("delete", "user", "high"),
        ("revoke", "role", "high"),
        ("disable", "policy", "high"),
        ("delete", "device", "medium"),
        ("assign", "role", "medium"),
        ("assign", "license", "low"),
        ("create", "user", "low"),
    ],
)
def test_assess_risk(verb: str, target: str, expected: str) -> None:
    assert assess_risk(verb, target) == expected


def test_reversible_verbs() -> None:
    verbs = ("create", "read", "update", "delete", "assign", "revoke", "enable", "disable", "analyze")
    reversible = [verb for verb in verbs if is_reversible(verb)]
    assert reversible == ["create", "update", "assign", "enable", "disable"]


def test_no_actions_for_plain_text() -> None:
    assert extract("hello") == []

from __future__ import annotations

from core.parsers.conditions import extract, logical_operator, parse_clause


def test_risk_clause_before_then() -> None:
    conditions = extract("if risk is high then disable the user")
    assert len(conditions) == 1
    condition = conditions[0]
    assert condition.type == "if"
    assert condition.field == "risk"
    assert condition.operator == "equals"
    assert condition.value == "high"
    assert condition.logical_operator is None


def test_where_clause_runs_to_end_of_text() -> None:
    conditions = extract("list users where status is inactive")
    assert [(c.type, c.field, c.value) for c in conditions] == [("where", "status", "inactive")]


def test_count_comparisons() -> None:
    greater = parse_clause("more than 50 members", "when")
    assert (greater.field, greater.operator, greater.value) == ("count", "greater_than", "50")
    fewer = parse_clause("less than 3 owners", "unless")
    assert (fewer.field, fewer.operator, fewer.value) == ("count", "less_than", "3")


def test_time_window_clause() -> None:
    condition = parse_clause("created within 30 days", "where")
    assert (condition.field, condition.operator, condition.value) == ("time", "within", "30 days")


def test_location_template_shadows_later_templates() -> None:
    condition = parse_clause("not signed in within 30 days", "where")
    assert condition.field == "location"
    assert condition.value == "within"


def test_first_matching_template_wins() -> None:
    condition = parse_clause("accounts from finance", "where")
    assert condition.field == "location"
    assert condition.value == "finance"


def test_unrecognized_clause_is_dropped() -> None:
    assert parse_clause("the moon is full", "if") is None
    assert extract("if the moon is full then notify me") == []


def test_conditions_grouped_by_clause_kind() -> None:
    conditions = extract("unless risk is low, disable users when status is disabled, and notify")
    assert [c.type for c in conditions] == ["when", "unless"]


def test_logical_operator_detection() -> None:
    assert logical_operator("status is active and more than 5") == "and"
    assert logical_operator("risk is high or medium") == "or"
    assert logical_operator("risk is high") is None


def test_logical_operator_attached_to_condition() -> None:
    condition = parse_clause("risk is high or medium", "where")
    assert condition.logical_operator == "or"
    assert condition.to_dict()["logicalOperator"] == "or"

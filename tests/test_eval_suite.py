from pathlib import Path

import pytest

from app.eval_suite import EvalCase, evaluate_cases, load_cases
from core.command_service import CommandService


def test_evaluate_cases_counts_accuracy() -> None:
    cases = [
        EvalCase(prompt="delete all inactive users", expected_intent="management", expected_verbs=["delete"]),
        EvalCase(prompt="list all users", expected_intent="analysis", expected_verbs=["read"]),
        EvalCase(prompt="remove the user", expected_intent="management", expected_verbs=["delete"]),
    ]
    results = evaluate_cases(CommandService(), cases)
    assert results["total"] == 3
    assert results["intent_accuracy"] == pytest.approx(2 / 3)
    assert results["verb_accuracy"] == pytest.approx(2 / 3)
    assert [entry["prompt"] for entry in results["mismatches"]] == ["list all users", "remove the user"]
    assert results["mismatches"][1]["predicted_verbs"] == ["delete", "revoke"]


def test_complexity_mismatch_is_reported() -> None:
    cases = [EvalCase(prompt="hello", expected_intent="query", expected_complexity="enterprise")]
    results = evaluate_cases(CommandService(), cases)
    assert results["intent_accuracy"] == 1.0
    assert results["mismatches"][0]["predicted_complexity"] == "simple"


def test_empty_case_list() -> None:
    results = evaluate_cases(CommandService(), [])
    assert results == {"total": 0, "intent_accuracy": 0.0, "verb_accuracy": 0.0, "mismatches": []}


def test_load_cases_skips_incomplete_entries(tmp_path) -> None:
    config_path = tmp_path / "prompts.yml"
    config_path.write_text(
        "prompts:\n"
        "  - prompt: delete all inactive users\n"
        "    expected_intent: management\n"
        "    expected_verbs: [delete]\n"
        "  - prompt: missing intent\n"
        "  - just a string\n",
        encoding="utf-8",
    )
    cases = load_cases(config_path)
    assert cases == [EvalCase(prompt="delete all inactive users", expected_intent="management", expected_verbs=["delete"])]


def test_load_cases_rejects_bad_shape(tmp_path) -> None:
    config_path = tmp_path / "prompts.yml"
    config_path.write_text("- not a mapping\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_cases(config_path)
    assert load_cases(tmp_path / "missing.yml") == []


def test_bundled_prompts_all_pass() -> None:
    cases = load_cases(Path(__file__).resolve().parents[1] / "config" / "eval_prompts.yml")
    assert cases
    results = evaluate_cases(CommandService(), cases)
    assert results["mismatches"] == []

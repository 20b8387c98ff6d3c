"""Regression harness: compile a bundled prompt set and score the results."""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from app.config import get_eval_config_path
from app.main import build_service
from core.parsers.types import ParsedCommand

DEFAULT_REPORT_PATH = Path("reports/compile_eval.json")
EVAL_SESSION_ID = "eval"


@dataclass
class EvalCase:
    prompt: str
    expected_intent: str
    expected_verbs: List[str] = field(default_factory=list)
    expected_complexity: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: Any) -> Optional["EvalCase"]:
        """Build a case from one YAML entry; incomplete entries yield ``None``."""
        if not isinstance(entry, Mapping):
            return None
        prompt = entry.get("prompt")
        intent = entry.get("expected_intent")
        if not prompt or not intent:
            return None
        verbs = entry.get("expected_verbs")
        return cls(
            prompt=str(prompt),
            expected_intent=str(intent),
            expected_verbs=[str(verb) for verb in verbs] if isinstance(verbs, list) else [],
            expected_complexity=entry.get("expected_complexity"),
        )


def load_cases(path: Optional[Path]) -> List[EvalCase]:
    if path is None or not path.exists():
        return []
    document = yaml.safe_load(path.read_text(encoding="utf-8"))
    entries = document.get("prompts") if isinstance(document, dict) else None
    if not isinstance(entries, list):
        raise ValueError(f"{path} must be a mapping with a 'prompts' list.")
    cases = [EvalCase.from_entry(entry) for entry in entries]
    return [case for case in cases if case is not None]


def _verbs(command: ParsedCommand) -> List[str]:
    # shared synonyms emit one action per verb category, so compare as sets
    return sorted({action.verb for action in command.actions})


def _mismatch(case: EvalCase, command: ParsedCommand) -> Dict[str, Any]:
    return {
        "prompt": case.prompt,
        "expected_intent": case.expected_intent,
        "predicted_intent": command.intent.primary,
        "expected_verbs": sorted(set(case.expected_verbs)),
        "predicted_verbs": _verbs(command),
        "expected_complexity": case.expected_complexity,
        "predicted_complexity": command.complexity,
    }


def evaluate_cases(service, cases: Iterable[EvalCase]) -> dict:
    """Score intent, verb set and (optional) complexity for every case.

    An empty ``expected_verbs`` list skips the verb comparison for that case.
    """
    case_list = list(cases)
    intent_matches = 0
    verb_matches = 0
    mismatches: List[Dict[str, Any]] = []

    for case in case_list:
        command = service.compile(case.prompt, session_token=EVAL_SESSION_ID)
        intent_ok = command.intent.primary == case.expected_intent
        verbs_ok = not case.expected_verbs or _verbs(command) == sorted(set(case.expected_verbs))
        complexity_ok = case.expected_complexity in (None, command.complexity)

        intent_matches += intent_ok
        verb_matches += verbs_ok
        if not (intent_ok and verbs_ok and complexity_ok):
            mismatches.append(_mismatch(case, command))

    count = len(case_list)
    return {
        "total": count,
        "intent_accuracy": intent_matches / count if count else 0.0,
        "verb_accuracy": verb_matches / count if count else 0.0,
        "mismatches": mismatches,
    }


def _print_summary(results: dict, limit: int = 10) -> None:
    print(
        f"{results['total']} prompts: intent {results['intent_accuracy']:.1%}, "
        f"verbs {results['verb_accuracy']:.1%}, {len(results['mismatches'])} mismatched"
    )
    for entry in results["mismatches"][:limit]:
        print(
            f"  {entry['prompt']!r}: expected {entry['expected_intent']} {entry['expected_verbs']}, "
            f"got {entry['predicted_intent']} {entry['predicted_verbs']} ({entry['predicted_complexity']})"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Score the command compiler against a prompt set")
    parser.add_argument("--config", type=Path, default=get_eval_config_path())
    parser.add_argument("--report", type=Path, default=DEFAULT_REPORT_PATH)
    args = parser.parse_args()

    cases = load_cases(args.config)
    if not cases:
        raise SystemExit(f"No evaluation prompts found in {args.config}.")

    results = evaluate_cases(build_service(), cases)
    args.report.parent.mkdir(parents=True, exist_ok=True)
    args.report.write_text(json.dumps(results, indent=2), encoding="utf-8")
    _print_summary(results)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()

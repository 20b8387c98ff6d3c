"""Action-verb extraction with risk and reversibility metadata."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from core.parser_utils import contains_keyword, find_word_index, first_match, split_words
from core.pattern_catalog import CATALOG, PatternCatalog
from core.parsers.types import Action

UNKNOWN_TARGET = "unknown"
TARGET_LOOKAHEAD = 3

SEQUENTIAL_EXECUTION = "sequential_execution"
CONDITIONAL_EXECUTION = "conditional_execution"
_SEQUENTIAL_HINTS = ("then", "after", "and then")
_CONDITIONAL_HINTS = ("if", "when", "where")

_DESTRUCTIVE_VERBS = {"delete", "revoke", "disable"}
_SENSITIVE_TARGETS = {"user", "policy", "role"}
_REVERSIBLE_VERBS = {"create", "update", "assign", "enable", "disable"}


def extract(message: str, catalog: PatternCatalog = CATALOG) -> List[Action]:
    """Emit one action per synonym found in the text.

    Synonyms shared between categories (``remove``, ``block``) produce one
    action per category; nothing is deduplicated.
    """

    text = message or ""
    lowered = text.lower()
    parameters = extract_parameters(text, catalog)
    dependencies = find_dependencies(lowered)

    actions: List[Action] = []
    for verb, synonyms in catalog.action_verbs:
        for synonym in synonyms:
            if synonym not in lowered:
                continue
            target = find_target(synonym, text, catalog)
            actions.append(
                Action(
                    verb=verb,
                    target=target,
                    parameters=dict(parameters),
                    dependencies=dependencies,
                    risk_level=assess_risk(verb, target),
                    reversible=is_reversible(verb),
                )
            )
    return actions


def find_target(synonym: str, message: str, catalog: PatternCatalog = CATALOG) -> str:
    """Look up to three words past the verb for an entity noun, else take the next word."""

    words = split_words(message)
    verb_index = find_word_index(words, synonym)
    if verb_index == -1 or verb_index >= len(words) - 1:
        return UNKNOWN_TARGET

    for word in words[verb_index + 1 : verb_index + 1 + TARGET_LOOKAHEAD]:
        candidate = word.lower()
        for entity_type, pattern in catalog.entity_patterns:
            if pattern.search(candidate):
                return entity_type

    return words[verb_index + 1] or UNKNOWN_TARGET


def extract_parameters(message: str, catalog: PatternCatalog = CATALOG) -> Dict[str, Any]:
    parameters: Dict[str, Any] = {}
    for name, pattern in catalog.parameter_patterns:
        group = 1 if pattern.groups else 0
        value = first_match(pattern, message, group)
        if value:
            parameters[name] = value
    return parameters


def find_dependencies(lowered: str) -> Tuple[str, ...]:
    dependencies: List[str] = []
    if contains_keyword(lowered, _SEQUENTIAL_HINTS):
        dependencies.append(SEQUENTIAL_EXECUTION)
    if contains_keyword(lowered, _CONDITIONAL_HINTS):
        dependencies.append(CONDITIONAL_EXECUTION)
    return tuple(dependencies)


def assess_risk(verb: str, target: str) -> str:
    if verb in _DESTRUCTIVE_VERBS and target in _SENSITIVE_TARGETS:
        return "high"
    if verb in _DESTRUCTIVE_VERBS or (verb == "assign" and target == "role"):
        return "medium"
    return "low"


def is_reversible(verb: str) -> bool:
    return verb in _REVERSIBLE_VERBS


__all__ = [
    "CONDITIONAL_EXECUTION",
    "SEQUENTIAL_EXECUTION",
    "UNKNOWN_TARGET",
    "assess_risk",
    "extract",
    "extract_parameters",
    "find_dependencies",
    "find_target",
    "is_reversible",
]

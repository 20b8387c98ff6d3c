"""Conditional clause extraction (if / when / where / unless)."""

from __future__ import annotations

import re
from typing import List, Optional

from core.pattern_catalog import CATALOG, PatternCatalog
from core.parsers.types import Condition

_AND_PATTERN = re.compile(r"\band\b", re.IGNORECASE)
_OR_PATTERN = re.compile(r"\bor\b", re.IGNORECASE)


def extract(message: str, catalog: PatternCatalog = CATALOG) -> List[Condition]:
    """Return conditions grouped by clause kind, then by position in the text."""

    text = message or ""
    conditions: List[Condition] = []
    for clause_type, pattern in catalog.clause_patterns:
        for match in pattern.finditer(text):
            condition = parse_clause(match.group(1), clause_type, catalog)
            if condition is not None:
                conditions.append(condition)
    return conditions


def parse_clause(clause: str, clause_type: str, catalog: PatternCatalog = CATALOG) -> Optional[Condition]:
    """Match ``clause`` against the field templates; the first hit wins, no hit drops it."""

    lowered = clause.lower().strip()
    for template in catalog.condition_templates:
        for pattern in template.patterns:
            match = pattern.search(lowered)
            if not match:
                continue
            return Condition(
                type=clause_type,
                field=template.field,
                operator=template.operator,
                value=match.group("value").strip(),
                logical_operator=logical_operator(clause),
            )
    return None


def logical_operator(clause: str) -> Optional[str]:
    if _AND_PATTERN.search(clause):
        return "and"
    if _OR_PATTERN.search(clause):
        return "or"
    return None


__all__ = ["extract", "logical_operator", "parse_clause"]

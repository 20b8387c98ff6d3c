"""Intent classification for admin commands."""

from __future__ import annotations

from typing import Optional

from core.pattern_catalog import CATALOG, PatternCatalog
from core.parsers.types import Intent

DEFAULT_INTENT = "query"
DEFAULT_URGENCY = "medium"


# WHAT: pick the primary/secondary intent and urgency for an utterance.
# WHY: complexity scoring, confidence, and downstream routing all key off the intent category.
# HOW: walk the catalog categories in order and stop at the first non-query hit; the
#      query check itself never ends the walk, so query only survives as the default.
def classify(message: str, catalog: PatternCatalog = CATALOG) -> Intent:
    lowered = (message or "").lower()
    primary = DEFAULT_INTENT

    for category, patterns in catalog.intent_patterns:
        if any(pattern.search(lowered) for pattern in patterns):
            primary = category
        if primary != DEFAULT_INTENT:
            break

    return Intent(
        primary=primary,
        category=primary,
        urgency=_urgency(lowered, catalog),
        secondary=_secondary(primary, lowered, catalog),
    )


def _urgency(lowered: str, catalog: PatternCatalog) -> str:
    for level, pattern in catalog.urgency_patterns:
        if pattern.search(lowered):
            return level
    return DEFAULT_URGENCY


def _secondary(primary: str, lowered: str, catalog: PatternCatalog) -> Optional[str]:
    for required_primary, pattern, secondary in catalog.secondary_intents:
        if primary == required_primary and pattern.search(lowered):
            return secondary
    return None


__all__ = ["classify", "DEFAULT_INTENT", "DEFAULT_URGENCY"]

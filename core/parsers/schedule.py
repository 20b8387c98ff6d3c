"""Recurrence extraction."""

from __future__ import annotations

from typing import Optional

from core.parser_utils import first_match
from core.pattern_catalog import CATALOG, PatternCatalog
from core.parsers.types import Schedule


def extract(message: str, catalog: PatternCatalog = CATALOG) -> Optional[Schedule]:
    """Return the first matching frequency (once → yearly) or ``None``.

    Day-of-week and time-of-day hints are attached only when a frequency hit.
    """

    lowered = (message or "").lower()
    for frequency, pattern in catalog.schedule_patterns:
        if not pattern.search(lowered):
            continue
        return Schedule(
            frequency=frequency,
            day_of_week=first_match(catalog.weekday_pattern, lowered),
            time=first_match(catalog.time_of_day_pattern, lowered, 1),
        )
    return None


__all__ = ["extract"]

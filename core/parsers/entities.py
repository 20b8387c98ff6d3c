"""Entity extraction for directory objects (users, groups, devices, ...)."""

from __future__ import annotations

from typing import Any, Dict, List

from core.parser_utils import contains_keyword, first_match, word_window
from core.pattern_catalog import CATALOG, PatternCatalog
from core.parsers.types import Entity

BASE_CONFIDENCE = 0.7
SPECIFIC_CONFIDENCE = 0.9
FALLBACK_ENTITY_TYPE = "tenant"

# (keyword, attribute, value) flags scanned across the whole input per entity type.
_TYPE_FLAGS = {
    "user": (
        ("guest", "userType", "guest"),
        ("admin", "role", "admin"),
        ("inactive", "status", "inactive"),
    ),
    "group": (
        ("security", "groupType", "security"),
        ("distribution", "groupType", "distribution"),
    ),
    "device": (
        ("compliant", "complianceStatus", "compliant"),
        ("managed", "managementType", "managed"),
    ),
}


def extract(message: str, catalog: PatternCatalog = CATALOG) -> List[Entity]:
    """Return general entities followed by specific identifiers, in pattern order."""

    text = message or ""
    lowered = text.lower()
    entities: List[Entity] = []

    for entity_type, pattern in catalog.entity_patterns:
        for match in pattern.finditer(lowered):
            value = match.group(0)
            entities.append(
                Entity(
                    type=entity_type,
                    value=value,
                    confidence=entity_confidence(value, lowered),
                    context=word_window(text, value),
                    attributes=entity_attributes(entity_type, text, catalog),
                )
            )

    entities.extend(_specific_identifiers(text, catalog))
    return entities


def entity_confidence(value: str, lowered_input: str) -> float:
    confidence = BASE_CONFIDENCE
    if "@" in value:
        confidence += 0.2
    if len(value) > 10:
        confidence += 0.1
    if f"all {value}" in lowered_input:
        confidence += 0.1
    return min(confidence, 1.0)


def entity_attributes(entity_type: str, message: str, catalog: PatternCatalog = CATALOG) -> Dict[str, Any]:
    """Attributes are read from the whole input, so every entity of one input shares them."""

    lowered = message.lower()
    attributes: Dict[str, Any] = {}

    quantifier = first_match(catalog.quantifier_pattern, message)
    if quantifier:
        attributes["quantifier"] = quantifier
    if contains_keyword(lowered, ("where", "with")):
        attributes["hasFilters"] = True

    for keyword, name, value in _TYPE_FLAGS.get(entity_type, ()):
        if keyword in lowered:
            attributes[name] = value
    return attributes


def _specific_identifiers(message: str, catalog: PatternCatalog) -> List[Entity]:
    found: List[Entity] = []
    for specific_type, pattern in catalog.specific_patterns:
        for match in pattern.finditer(message):
            found.append(
                Entity(
                    type=catalog.specific_type_map.get(specific_type, FALLBACK_ENTITY_TYPE),
                    value=match.group(0),
                    confidence=SPECIFIC_CONFIDENCE,
                    context=specific_type,
                    attributes={"specificType": specific_type},
                )
            )
    return found


__all__ = ["extract", "entity_attributes", "entity_confidence", "FALLBACK_ENTITY_TYPE"]

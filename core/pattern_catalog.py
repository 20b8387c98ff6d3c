"""Read-only pattern tables shared by every command extractor.

The catalog is assembled once at import time and exposed as ``CATALOG``. All
tables are tuples (ordered, immutable) or ``MappingProxyType`` views so the
extractors can share them without copying and nothing can mutate them at
runtime.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple

_I = re.IGNORECASE


@dataclass(frozen=True)
class ConditionTemplate:
    """Map a conditional clause onto a ``field``/``operator`` pair.

    Every pattern exposes the compared value in a ``value`` group.
    """

    field: str
    operator: str
    patterns: Tuple[Pattern[str], ...]


@dataclass(frozen=True)
class PatternCatalog:
    intent_patterns: Tuple[Tuple[str, Tuple[Pattern[str], ...]], ...]
    urgency_patterns: Tuple[Tuple[str, Pattern[str]], ...]
    secondary_intents: Tuple[Tuple[str, Pattern[str], str], ...]
    entity_patterns: Tuple[Tuple[str, Pattern[str]], ...]
    specific_patterns: Tuple[Tuple[str, Pattern[str]], ...]
    specific_type_map: Mapping[str, str]
    quantifier_pattern: Pattern[str]
    action_verbs: Tuple[Tuple[str, Tuple[str, ...]], ...]
    parameter_patterns: Tuple[Tuple[str, Pattern[str]], ...]
    clause_patterns: Tuple[Tuple[str, Pattern[str]], ...]
    condition_templates: Tuple[ConditionTemplate, ...]
    schedule_patterns: Tuple[Tuple[str, Pattern[str]], ...]
    weekday_pattern: Pattern[str]
    time_of_day_pattern: Pattern[str]

    def intent_categories(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.intent_patterns)

    def entity_types(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.entity_patterns)

    def verbs(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.action_verbs)

    def synonyms_for(self, verb: str) -> Tuple[str, ...]:
        for name, synonyms in self.action_verbs:
            if name == verb:
                return synonyms
        return ()


_DEPARTMENTS = "IT|HR|Finance|Marketing|Sales|Engineering|Operations|Legal|Admin"
_CLAUSE_BOUNDARY = r"(?:\s+then\b|\s*,|\s+(?:and|or)\b)"


def _build_catalog() -> PatternCatalog:
    # Category order is significant: the classifier walks it front to back.
    intent_patterns = (
        (
            "query",
            (
                re.compile(r"\b(show|list|get|find|search|display|tell me|what|which|how many)\b"),
                re.compile(r"\b(who (is|are)|where (is|are))\b"),
            ),
        ),
        (
            "automation",
            (
                re.compile(
                    r"\b(create|automate|set up|configure|build|generate|make)\b.*\b(workflow|automation|process|schedule)\b"
                ),
                re.compile(r"\b(every|daily|weekly|monthly|when.*then|if.*then)\b"),
            ),
        ),
        (
            "management",
            (
                re.compile(r"\b(add|remove|delete|update|modify|change|assign|revoke|grant|disable|enable)\b"),
                re.compile(r"\b(manage|administer|control)\b"),
            ),
        ),
        (
            "analysis",
            (
                re.compile(r"\b(analyze|review|audit|assess|evaluate|compare|benchmark)\b"),
                re.compile(r"\b(insights|trends|patterns|anomalies|risks)\b"),
            ),
        ),
        (
            "reporting",
            (
                re.compile(r"\b(report|dashboard|summary|export|send|email|notify)\b"),
                re.compile(r"\b(generate.*report|create.*dashboard)\b"),
            ),
        ),
    )

    urgency_patterns = (
        ("critical", re.compile(r"\b(urgent|asap|immediately|critical|emergency|now)\b")),
        ("high", re.compile(r"\b(soon|quickly|fast|priority|important)\b")),
        ("low", re.compile(r"\b(later|eventually|when possible|low priority)\b")),
    )

    secondary_intents = (
        ("automation", re.compile(r"report|dashboard|notify"), "reporting"),
        ("management", re.compile(r"analyze|review"), "analysis"),
    )

    entity_patterns = (
        ("user", re.compile(r"\b(users?|accounts?|employees?|people|persons?|individuals?)\b")),
        ("group", re.compile(r"\b(groups?|teams?|distribution lists?|security groups?)\b")),
        ("device", re.compile(r"\b(devices?|computers?|laptops?|phones?|tablets?|endpoints?)\b")),
        ("app", re.compile(r"\b(apps?|applications?|software|programs?|services?)\b")),
        ("policy", re.compile(r"\b(policies|policy|rules?|conditional access|compliance|configuration)\b")),
        ("license", re.compile(r"\b(licenses?|subscriptions?|plans?|skus?)\b")),
        ("role", re.compile(r"\b(roles?|permissions?|access|privileges?|admin|administrator)\b")),
        ("location", re.compile(r"\b(locations?|countries?|regions?|offices?|sites?)\b")),
    )

    mail_address = r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"
    specific_patterns = (
        ("email", re.compile(mail_address)),
        ("guid", re.compile(r"\b[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\b", _I)),
        ("upn", re.compile(mail_address)),
        ("department", re.compile(rf"\b({_DEPARTMENTS})\b", _I)),
        ("country", re.compile(r"\b(US|USA|UK|Canada|Australia|Germany|France|Japan|India|Brazil)\b", _I)),
    )
    specific_type_map = MappingProxyType(
        {
            "email": "user",
            "upn": "user",
            "guid": "app",
            "department": "group",
            "country": "location",
        }
    )

    action_verbs = (
        ("create", ("create", "add", "new", "make", "build", "generate", "establish")),
        ("read", ("show", "list", "get", "find", "search", "display", "view", "retrieve")),
        ("update", ("update", "modify", "change", "edit", "alter", "adjust", "configure")),
        ("delete", ("delete", "remove", "destroy", "eliminate", "purge", "clear")),
        ("assign", ("assign", "grant", "give", "provide", "allocate", "distribute")),
        ("revoke", ("revoke", "remove", "take away", "withdraw", "deny", "block")),
        ("enable", ("enable", "activate", "turn on", "start", "allow", "permit")),
        ("disable", ("disable", "deactivate", "turn off", "stop", "prevent", "block")),
        ("analyze", ("analyze", "review", "audit", "assess", "evaluate", "examine", "inspect")),
    )

    parameter_patterns = (
        ("count", re.compile(r"\b(\d+)\b")),
        ("timeframe", re.compile(r"\b(?:last|past|next)\s+\d+\s+(?:days?|weeks?|months?|years?)\b", _I)),
        ("location", re.compile(r"\bin\s+([A-Za-z\s]+)", _I)),
        ("department", re.compile(rf"\bin\s+({_DEPARTMENTS})\b", _I)),
        ("status", re.compile(r"\b(active|inactive|enabled|disabled|compliant|non-compliant)\b", _I)),
    )

    clause_patterns = (
        ("if", re.compile(rf"\bif\s+(.+?){_CLAUSE_BOUNDARY}", _I)),
        ("when", re.compile(rf"\bwhen\s+(.+?){_CLAUSE_BOUNDARY}", _I)),
        ("where", re.compile(rf"\bwhere\s+(.+?)(?:{_CLAUSE_BOUNDARY}|\s*$)", _I)),
        ("unless", re.compile(rf"\bunless\s+(.+?)(?:{_CLAUSE_BOUNDARY}|\s*$)", _I)),
    )

    condition_templates = (
        ConditionTemplate(
            "status",
            "equals",
            (re.compile(r"\b(?:is|are|equals?)\s+(?P<value>active|inactive|enabled|disabled|compliant)\b"),),
        ),
        ConditionTemplate("location", "in", (re.compile(r"\b(?:in|from|at)\s+(?P<value>[a-z\s]+)"),)),
        ConditionTemplate(
            "department",
            "equals",
            (re.compile(r"\b(?:in|from)\s+(?P<value>it|hr|finance|marketing|sales|engineering)\b"),),
        ),
        ConditionTemplate("count", "greater_than", (re.compile(r"\bmore than\s+(?P<value>\d+)"),)),
        ConditionTemplate("count", "less_than", (re.compile(r"\bless than\s+(?P<value>\d+)"),)),
        ConditionTemplate("time", "within", (re.compile(r"\bwithin\s+(?P<value>\d+\s+(?:days?|weeks?|months?))"),)),
        ConditionTemplate(
            "risk",
            "equals",
            (
                re.compile(r"\b(?P<value>high|medium|low)\s+risk\b"),
                re.compile(r"\brisk(?:\s+level)?\s+(?:is|are|equals?)\s+(?P<value>high|medium|low)\b"),
            ),
        ),
    )

    schedule_patterns = (
        ("once", re.compile(r"\b(once|one time|single time)\b")),
        ("daily", re.compile(r"\b(daily|every day|each day)\b")),
        ("weekly", re.compile(r"\b(weekly|every week|each week)\b")),
        ("monthly", re.compile(r"\b(monthly|every month|each month)\b")),
        ("quarterly", re.compile(r"\b(quarterly|every quarter)\b")),
        ("yearly", re.compile(r"\b(yearly|annually|every year)\b")),
    )

    return PatternCatalog(
        intent_patterns=intent_patterns,
        urgency_patterns=urgency_patterns,
        secondary_intents=secondary_intents,
        entity_patterns=entity_patterns,
        specific_patterns=specific_patterns,
        specific_type_map=specific_type_map,
        quantifier_pattern=re.compile(r"\b(all|some|most|few|many|several|\d+)\b", _I),
        action_verbs=action_verbs,
        parameter_patterns=parameter_patterns,
        clause_patterns=clause_patterns,
        condition_templates=condition_templates,
        schedule_patterns=schedule_patterns,
        weekday_pattern=re.compile(r"\b(monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b"),
        time_of_day_pattern=re.compile(r"\bat\s+(\d{1,2}:\d{2}(?:\s?[ap]m)?|\d{1,2}\s?[ap]m)"),
    )


CATALOG = _build_catalog()


__all__ = ["CATALOG", "ConditionTemplate", "PatternCatalog"]

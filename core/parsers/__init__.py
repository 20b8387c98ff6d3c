"""Command extractors, one module per concern."""

from . import actions, conditions, entities, intent, schedule

__all__ = ["actions", "conditions", "entities", "intent", "schedule"]

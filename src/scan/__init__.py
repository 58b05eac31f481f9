"""Simulated scan-and-clean pipeline."""

from .catalog import MOCK_ITEMS, CandidateCatalog, MockCatalog
from .machine import ActionResult, Rejection, ScanCleanMachine
from .models import COMPRESS_FREED_FRACTION, CleaningRule, FlaggedItem, SessionCompletionEvent
from .rules import RuleStore, filter_items, rule_matches
from .timer import RepeatingTimer, scheduler_timer_factory

__all__ = [
    "ActionResult",
    "CandidateCatalog",
    "CleaningRule",
    "COMPRESS_FREED_FRACTION",
    "FlaggedItem",
    "MOCK_ITEMS",
    "MockCatalog",
    "Rejection",
    "RepeatingTimer",
    "RuleStore",
    "ScanCleanMachine",
    "SessionCompletionEvent",
    "filter_items",
    "rule_matches",
    "scheduler_timer_factory",
]

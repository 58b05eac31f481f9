"""Cleaning-rule matching and persistence."""

from typing import Iterable, Optional

import structlog

from entities import EntityStore
from shared_types import EntityKind

from .models import CleaningRule, FlaggedItem

logger = structlog.get_logger()

WILDCARD = "*"


def rule_matches(rule: CleaningRule, item: FlaggedItem) -> bool:
    """Extension and size constraints of one rule, ANDed."""
    extension_match = rule.file_extension == WILDCARD or item.name.endswith(rule.file_extension)
    # Unset and zero both mean "no size constraint"
    size_match = not rule.larger_than_mb or item.size_mb >= rule.larger_than_mb
    return extension_match and size_match


def active_rules(rules: Iterable[CleaningRule]) -> list[CleaningRule]:
    return [r for r in rules if r.is_active]


def filter_items(
    items: Iterable[FlaggedItem], rules: Iterable[CleaningRule]
) -> list[FlaggedItem]:
    """Keep items matched by any active rule, preserving catalog order."""
    candidates = active_rules(rules)
    return [item for item in items if any(rule_matches(r, item) for r in candidates)]


class RuleStore:
    """CRUD for a user's cleaning rules on top of the entity store."""

    def __init__(self, store: EntityStore, user_id: str):
        self.store = store
        self.user_id = user_id

    def add(self, rule: CleaningRule) -> CleaningRule:
        rule.id = self.store.create(EntityKind.CLEANING_RULE, rule.to_record(), user_id=self.user_id)
        logger.info("rule_created", rule_id=rule.id, name=rule.name, extension=rule.file_extension)
        return rule

    def get(self, rule_id: str) -> Optional[CleaningRule]:
        record = self.store.get(EntityKind.CLEANING_RULE, rule_id)
        if not record or record.get("user_id") != self.user_id:
            return None
        return CleaningRule.from_record(record)

    def list(self, only_active: bool = False) -> list[CleaningRule]:
        records = self.store.filter(EntityKind.CLEANING_RULE, user_id=self.user_id)
        rules = [CleaningRule.from_record(r) for r in records]
        return active_rules(rules) if only_active else rules

    def set_active(self, rule_id: str, is_active: bool) -> bool:
        if self.get(rule_id) is None:
            return False
        return self.store.update(EntityKind.CLEANING_RULE, rule_id, {"is_active": is_active})

    def delete(self, rule_id: str) -> bool:
        if self.get(rule_id) is None:
            return False
        return self.store.delete(EntityKind.CLEANING_RULE, rule_id)

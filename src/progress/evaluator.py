"""Decides which badges a progress change newly unlocks."""

from datetime import datetime
from typing import Iterable, Optional

import structlog

from shared_types import PredicateKind

from .badges import BADGE_RULES
from .models import Achievement, BadgeRule, UserProgress

logger = structlog.get_logger()


class AchievementEvaluator:
    """Evaluates badge predicates against before/after progress snapshots.

    Crossed-threshold badges are edge-triggered: the value before the change
    must be below the requirement and the value after at or above it.
    Single-session and streak badges are level-triggered and rely on the
    earned set to stay unique. No badge is ever returned when its name is
    already in ``earned``.
    """

    def __init__(self, rules: Iterable[BadgeRule] = BADGE_RULES):
        self.rules = tuple(rules)

    def evaluate(
        self,
        before: UserProgress,
        after: UserProgress,
        earned: Iterable[str],
        event=None,
        now: Optional[datetime] = None,
    ) -> list[Achievement]:
        awarded_names = set(earned)
        now = now or datetime.now()
        new: list[Achievement] = []

        for rule in self.rules:
            if rule.name in awarded_names:
                continue
            if self._unlocked(rule, before, after, event):
                awarded_names.add(rule.name)
                new.append(Achievement.from_rule(rule, earned_at=now))
                logger.info("badge_unlocked", badge=rule.name, user_id=after.user_id)
        return new

    @staticmethod
    def _unlocked(rule: BadgeRule, before: UserProgress, after: UserProgress, event) -> bool:
        if rule.predicate == PredicateKind.CROSSED_THRESHOLD:
            pre = getattr(before, rule.counter)
            post = getattr(after, rule.counter)
            return pre < rule.requirement <= post
        if rule.predicate == PredicateKind.SINGLE_SESSION:
            if event is None:
                return False
            return getattr(event, rule.counter) >= rule.requirement
        if rule.predicate == PredicateKind.STREAK:
            return getattr(after, rule.counter) >= rule.requirement
        return False

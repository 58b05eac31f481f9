"""Persistence of progress, achievements and session records."""

from dataclasses import replace
from typing import Optional

import structlog

from entities import EntityStore
from scan.models import SessionCompletionEvent
from shared_types import EntityKind

from .models import Achievement, UserProgress

logger = structlog.get_logger()

_PROGRESS_KEY = "progress"


class ProgressStore:
    """Reads and writes the per-user gamification records."""

    def __init__(self, store: EntityStore):
        self.store = store

    def load(self, user_id: str) -> UserProgress:
        record = self.store.first(EntityKind.USER_PROGRESS, user_id=user_id)
        if record is None:
            return UserProgress(user_id=user_id)
        return UserProgress.from_record(record)

    def save(self, progress: UserProgress) -> UserProgress:
        """Create-or-update the user's single progress record."""
        data = progress.to_record()
        if progress.id and self.store.update(EntityKind.USER_PROGRESS, progress.id, data):
            return progress
        entity_id, created = self.store.create_unique(
            EntityKind.USER_PROGRESS, _PROGRESS_KEY, data, user_id=progress.user_id
        )
        if not created:
            self.store.update(EntityKind.USER_PROGRESS, entity_id, data)
        return replace(progress, id=entity_id)

    def set_level(self, user_id: str, level: int) -> UserProgress:
        """Administrative level change; nothing in the engine calls this."""
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        progress = replace(self.load(user_id), level=level)
        return self.save(progress)

    def achievements(self, user_id: str) -> list[Achievement]:
        records = self.store.filter(EntityKind.ACHIEVEMENT, user_id=user_id)
        return [Achievement.from_record(r) for r in records]

    def earned_badge_names(self, user_id: str) -> set[str]:
        return {a.badge_name for a in self.achievements(user_id)}

    def record_achievement(self, user_id: str, achievement: Achievement) -> tuple[str, bool]:
        """Insert keyed by (user, badge). Returns (id, created)."""
        entity_id, created = self.store.create_unique(
            EntityKind.ACHIEVEMENT,
            achievement.badge_name,
            achievement.to_record(),
            user_id=user_id,
        )
        if not created:
            logger.warning("duplicate_badge_suppressed", user_id=user_id, badge=achievement.badge_name)
        return entity_id, created

    def save_session(self, user_id: str, event: SessionCompletionEvent) -> str:
        return self.store.create(EntityKind.CLEANING_SESSION, event.to_record(), user_id=user_id)

    def sessions(self, user_id: str, limit: Optional[int] = None) -> list[dict]:
        rows = self.store.filter(EntityKind.CLEANING_SESSION, user_id=user_id)
        rows.sort(key=lambda r: r.get("completed_at", ""), reverse=True)
        return rows[:limit] if limit else rows

    def leaderboard(self, limit: int = 10) -> list[UserProgress]:
        records = self.store.filter(EntityKind.USER_PROGRESS)
        ranked = sorted(
            (UserProgress.from_record(r) for r in records),
            key=lambda p: p.total_points,
            reverse=True,
        )
        return ranked[:limit]

"""Bounded log of the user's past actions, used as LLM prompt context."""

from datetime import datetime
from typing import Optional

import structlog

from entities import EntityStore
from scan.models import FlaggedItem
from shared_types import BulkAction, EntityKind

logger = structlog.get_logger()

MAX_LEARNED_PREFERENCES = 50
_PREFERENCES_KEY = "learned_preferences"


def append_preference(entries: list[dict], entry: dict, limit: int = MAX_LEARNED_PREFERENCES) -> list[dict]:
    """Return a new list with ``entry`` appended and only the newest ``limit`` kept."""
    if limit <= 0:
        return []
    return [*entries, entry][-limit:]


def item_action_entry(item: FlaggedItem, action: BulkAction, now: Optional[datetime] = None) -> dict:
    return {
        "action": str(action),
        "file_type": str(item.media_kind),
        "category": str(item.category),
        "timestamp": (now or datetime.now()).isoformat(),
    }


class PreferenceRecorder:
    """Append-only preference log stored as one record per user."""

    def __init__(self, store: EntityStore, user_id: str, limit: int = MAX_LEARNED_PREFERENCES):
        self.store = store
        self.user_id = user_id
        self.limit = limit

    def _record_id(self) -> str:
        entity_id, _ = self.store.create_unique(
            EntityKind.LEARNED_PREFERENCES, _PREFERENCES_KEY, {"entries": []}, user_id=self.user_id
        )
        return entity_id

    def entries(self) -> list[dict]:
        record = self.store.first(EntityKind.LEARNED_PREFERENCES, user_id=self.user_id)
        return list(record.get("entries", [])) if record else []

    def recent(self, n: int) -> list[dict]:
        return self.entries()[-n:] if n > 0 else []

    def append(self, entry: dict) -> list[dict]:
        record_id = self._record_id()
        entries = append_preference(self.entries(), entry, self.limit)
        self.store.update(EntityKind.LEARNED_PREFERENCES, record_id, {"entries": entries})
        logger.debug("preference_recorded", user_id=self.user_id, action=entry.get("action"))
        return entries

    def record_item_action(self, item: FlaggedItem, action: BulkAction) -> list[dict]:
        """Callback for per-item preview actions on the scan machine."""
        return self.append(item_action_entry(item, action))

    def record_action(self, action: str, **details) -> list[dict]:
        """Non-file actions, e.g. a bulk auto-archive run."""
        entry = {"action": action, **details, "timestamp": datetime.now().isoformat()}
        return self.append(entry)

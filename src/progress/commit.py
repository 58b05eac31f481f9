"""Commit boundary: executes a ProgressUpdate's intents against storage once."""

import sqlite3
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

import structlog

from entities import EntityStoreError

from .aggregator import ProgressUpdate
from .intents import PersistSession, RecordAchievement, SaveProgress
from .models import UserProgress
from .store import ProgressStore

logger = structlog.get_logger()


@dataclass
class CommitReport:
    update_id: str
    progress: UserProgress
    session_id: Optional[str] = None
    achievement_ids: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ProgressCommitter:
    """Runs each update's intents exactly once.

    Storage failures are logged and reported, not retried. A second commit of
    the same update returns the first report untouched. Only the most recent
    `max_reports` reports are remembered.
    """

    def __init__(self, store: ProgressStore, max_reports: int = 128):
        self.store = store
        self.max_reports = max_reports
        self._reports: OrderedDict[str, CommitReport] = OrderedDict()

    def report_for(self, update_id: str) -> Optional[CommitReport]:
        return self._reports.get(update_id)

    def commit(self, update: ProgressUpdate) -> CommitReport:
        if update.update_id in self._reports:
            logger.warning("update_already_committed", update_id=update.update_id)
            self._reports.move_to_end(update.update_id)
            return self._reports[update.update_id]

        user_id = update.progress.user_id
        report = CommitReport(update_id=update.update_id, progress=update.progress)
        self._reports[update.update_id] = report
        while len(self._reports) > self.max_reports:
            self._reports.popitem(last=False)

        for intent in update.intents:
            try:
                if isinstance(intent, PersistSession):
                    report.session_id = self.store.save_session(user_id, intent.event)
                elif isinstance(intent, SaveProgress):
                    report.progress = self.store.save(intent.progress)
                elif isinstance(intent, RecordAchievement):
                    entity_id, created = self.store.record_achievement(user_id, intent.achievement)
                    if created:
                        report.achievement_ids.append(entity_id)
            except (sqlite3.Error, EntityStoreError) as e:
                name = type(intent).__name__
                logger.error("commit_intent_failed", intent=name, user_id=user_id, error=str(e))
                report.failures.append(f"{name}: {e}")

        logger.info(
            "progress_committed",
            user_id=user_id,
            update_id=update.update_id,
            intents=len(update.intents),
            failures=len(report.failures),
        )
        return report

"""Progress service: load, apply, commit.

Wires the pure aggregator to storage for one user. ``handle_completion`` is the
callback a ScanCleanMachine invokes when a cleaning cycle completes.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import structlog

from scan.models import SessionCompletionEvent
from shared_types import PointReason

from .aggregator import ProgressAggregator, ProgressUpdate, points_for_files_cleaned, progress_to_next_level
from .badges import BADGE_RULES
from .commit import CommitReport, ProgressCommitter
from .models import Achievement, UserProgress
from .store import ProgressStore
from .streak import current_streak_as_of

logger = structlog.get_logger()


@dataclass
class SessionOutcome:
    progress: UserProgress
    achievements: tuple[Achievement, ...] = ()
    points_awarded: int = 0
    reports: list[CommitReport] = field(default_factory=list)


@dataclass(frozen=True)
class ProgressOverview:
    progress: UserProgress
    level_progress: float
    current_streak: int
    badges_earned: int
    badges_total: int


class ProgressService:
    def __init__(
        self,
        store: ProgressStore,
        user_id: str,
        aggregator: Optional[ProgressAggregator] = None,
        committer: Optional[ProgressCommitter] = None,
    ):
        self.store = store
        self.user_id = user_id
        self.aggregator = aggregator or ProgressAggregator()
        self.committer = committer or ProgressCommitter(store)
        self.last_outcome: Optional[SessionOutcome] = None

    def current(self) -> UserProgress:
        return self.store.load(self.user_id)

    def _commit(self, update: ProgressUpdate) -> CommitReport:
        return self.committer.commit(update)

    def complete_session(
        self, event: SessionCompletionEvent, today: Optional[date] = None
    ) -> SessionOutcome:
        progress = self.current()
        earned = self.store.earned_badge_names(self.user_id)
        update = self.aggregator.apply_session_completion(progress, event, earned, today=today)
        report = self._commit(update)
        outcome = SessionOutcome(
            progress=report.progress,
            achievements=update.achievements,
            reports=[report],
        )

        points = points_for_files_cleaned(update.before, update.progress)
        if points:
            award = self.aggregator.award_points(report.progress, points, PointReason.CLEAN_FILES)
            award_report = self._commit(award)
            outcome.progress = award_report.progress
            outcome.points_awarded = points
            outcome.reports.append(award_report)

        self.last_outcome = outcome
        return outcome

    def handle_completion(self, event: SessionCompletionEvent) -> None:
        outcome = self.complete_session(event)
        failures = [f for r in outcome.reports for f in r.failures]
        if failures:
            logger.error("session_commit_incomplete", user_id=self.user_id, failures=failures)

    def award(self, reason: PointReason) -> UserProgress:
        update = self.aggregator.award(self.current(), reason)
        return self._commit(update).progress

    def award_points(self, amount: int, reason: str) -> UserProgress:
        update = self.aggregator.award_points(self.current(), amount, reason)
        return self._commit(update).progress

    def organize_folders(self, count: int = 1) -> tuple[UserProgress, tuple[Achievement, ...]]:
        earned = self.store.earned_badge_names(self.user_id)
        update = self.aggregator.apply_folders_organized(self.current(), count, earned)
        return self._commit(update).progress, update.achievements

    def daily_login(self, today: Optional[date] = None) -> UserProgress:
        update = self.aggregator.record_daily_login(self.current(), today=today)
        if not update.intents:
            return update.progress
        return self._commit(update).progress

    def reset_week(self) -> UserProgress:
        return self._commit(self.aggregator.reset_week(self.current())).progress

    def overview(self, today: Optional[date] = None) -> ProgressOverview:
        progress = self.current()
        return ProgressOverview(
            progress=progress,
            level_progress=progress_to_next_level(progress),
            current_streak=current_streak_as_of(progress, today),
            badges_earned=len(self.store.earned_badge_names(self.user_id)),
            badges_total=len(BADGE_RULES),
        )

    def leaderboard(self, limit: int = 10) -> list[UserProgress]:
        return self.store.leaderboard(limit)

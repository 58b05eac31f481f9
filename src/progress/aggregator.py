"""Progress aggregation: lifetime counters, points, and derived display values.

Every operation takes the current UserProgress snapshot and returns a
ProgressUpdate holding the new snapshot, any newly unlocked achievements, and
the side-effect intents the caller must commit. Nothing here touches storage.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Optional

import structlog

from scan.models import SessionCompletionEvent
from shared_types import PointReason

from .evaluator import AchievementEvaluator
from .intents import Intent, PersistSession, RecordAchievement, SaveProgress
from .models import Achievement, UserProgress
from .streak import advance_streak

logger = structlog.get_logger()

POINTS_PER_LEVEL = 100
FILES_PER_CLEAN_AWARD = 10

POINT_AWARDS: dict[PointReason, int] = {
    PointReason.CLEAN_FILES: 10,  # per 10 lifetime files cleaned
    PointReason.ORGANIZE_FOLDER: 15,
    PointReason.DAILY_LOGIN: 5,
    PointReason.AI_ANALYSIS: 25,
    PointReason.SHARE_FOLDER: 20,
}


def points_for_files_cleaned(before: UserProgress, after: UserProgress) -> int:
    """Clean-files points for every lifetime multiple of 10 files passed between snapshots."""
    crossed = (
        after.total_files_cleaned // FILES_PER_CLEAN_AWARD
        - before.total_files_cleaned // FILES_PER_CLEAN_AWARD
    )
    return max(0, crossed) * POINT_AWARDS[PointReason.CLEAN_FILES]


def progress_to_next_level(progress: UserProgress) -> float:
    """Fraction of the current level band reached, in [0, 1)."""
    level = max(1, progress.level)
    band = level * POINTS_PER_LEVEL
    return (max(0, progress.total_points) % band) / band


@dataclass(frozen=True)
class ProgressUpdate:
    before: UserProgress
    progress: UserProgress
    achievements: tuple[Achievement, ...] = ()
    intents: tuple[Intent, ...] = ()
    update_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


class ProgressAggregator:
    def __init__(self, evaluator: Optional[AchievementEvaluator] = None):
        self.evaluator = evaluator or AchievementEvaluator()

    def apply_session_completion(
        self,
        progress: UserProgress,
        event: SessionCompletionEvent,
        earned: Iterable[str] = (),
        today: Optional[date] = None,
    ) -> ProgressUpdate:
        """Fold one completed session into the lifetime counters.

        Badges are evaluated against the snapshot taken before the counters
        move, so milestone badges fire only on the session that crosses them.
        """
        day = today or event.completed_at.date()
        before = progress
        current, longest, last_day = advance_streak(before, day)
        after = replace(
            before,
            total_files_cleaned=before.total_files_cleaned + event.files_cleaned,
            total_space_freed_mb=before.total_space_freed_mb + event.space_freed_mb,
            sessions_completed=before.sessions_completed + 1,
            current_streak=current,
            longest_streak=longest,
            last_session_date=last_day,
        )
        achievements = tuple(self.evaluator.evaluate(before, after, earned, event=event))
        intents: list[Intent] = [PersistSession(event), SaveProgress(after)]
        intents.extend(RecordAchievement(a) for a in achievements)
        logger.debug(
            "session_applied",
            user_id=after.user_id,
            files_cleaned=event.files_cleaned,
            new_badges=[a.badge_name for a in achievements],
        )
        return ProgressUpdate(before, after, achievements, tuple(intents))

    def apply_folders_organized(
        self, progress: UserProgress, count: int, earned: Iterable[str] = ()
    ) -> ProgressUpdate:
        """Count organized folders, award their points, check organizing badges."""
        if count <= 0:
            raise ValueError(f"count must be > 0, got {count}")
        points = count * POINT_AWARDS[PointReason.ORGANIZE_FOLDER]
        after = replace(
            progress,
            folders_organized=progress.folders_organized + count,
            total_points=progress.total_points + points,
            points_this_week=progress.points_this_week + points,
        )
        achievements = tuple(self.evaluator.evaluate(progress, after, earned))
        intents: list[Intent] = [SaveProgress(after)]
        intents.extend(RecordAchievement(a) for a in achievements)
        return ProgressUpdate(progress, after, achievements, tuple(intents))

    def award_points(self, progress: UserProgress, amount: int, reason: str) -> ProgressUpdate:
        """Add points. Level is left alone."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        after = replace(
            progress,
            total_points=progress.total_points + amount,
            points_this_week=progress.points_this_week + amount,
        )
        logger.info("points_awarded", user_id=progress.user_id, amount=amount, reason=str(reason))
        return ProgressUpdate(progress, after, (), (SaveProgress(after),))

    def award(self, progress: UserProgress, reason: PointReason) -> ProgressUpdate:
        return self.award_points(progress, POINT_AWARDS[PointReason(reason)], reason)

    def record_daily_login(self, progress: UserProgress, today: Optional[date] = None) -> ProgressUpdate:
        """Award the daily-login points at most once per calendar day."""
        today = today or date.today()
        if progress.last_login_date == today:
            return ProgressUpdate(progress, progress)
        update = self.award(progress, PointReason.DAILY_LOGIN)
        after = replace(update.progress, last_login_date=today)
        return ProgressUpdate(progress, after, (), (SaveProgress(after),))

    def reset_week(self, progress: UserProgress) -> ProgressUpdate:
        """Week-boundary hook: zero the weekly points."""
        after = replace(progress, points_this_week=0)
        return ProgressUpdate(progress, after, (), (SaveProgress(after),))

    @staticmethod
    def progress_to_next_level(progress: UserProgress) -> float:
        return progress_to_next_level(progress)

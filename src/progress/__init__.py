"""Gamification: points, levels, streaks, badges and challenges."""

from .aggregator import POINT_AWARDS, ProgressAggregator, ProgressUpdate, points_for_files_cleaned, progress_to_next_level
from .analytics import SessionSummary, summarize_sessions
from .badges import BADGE_RULES, get_badge
from .challenges import Challenge, ChallengeBoard, completion_percent
from .commit import CommitReport, ProgressCommitter
from .evaluator import AchievementEvaluator
from .models import Achievement, BadgeRule, UserProgress
from .service import ProgressOverview, ProgressService, SessionOutcome
from .store import ProgressStore
from .streak import advance_streak, current_streak_as_of

__all__ = [
    "Achievement",
    "AchievementEvaluator",
    "BADGE_RULES",
    "BadgeRule",
    "Challenge",
    "ChallengeBoard",
    "CommitReport",
    "POINT_AWARDS",
    "ProgressAggregator",
    "ProgressCommitter",
    "ProgressOverview",
    "ProgressService",
    "ProgressStore",
    "ProgressUpdate",
    "SessionOutcome",
    "SessionSummary",
    "UserProgress",
    "advance_streak",
    "completion_percent",
    "current_streak_as_of",
    "get_badge",
    "points_for_files_cleaned",
    "progress_to_next_level",
    "summarize_sessions",
]

"""Tests for progress aggregation, streaks and badge evaluation."""

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from progress import (
    AchievementEvaluator,
    ProgressAggregator,
    UserProgress,
    advance_streak,
    current_streak_as_of,
    get_badge,
    points_for_files_cleaned,
    progress_to_next_level,
)
from progress.intents import PersistSession, RecordAchievement, SaveProgress
from scan import MOCK_ITEMS, SessionCompletionEvent
from shared_types import BulkAction, FileCategory, PointReason

DAY = date(2024, 3, 4)


def _event(files=5, space=200.0, scanned=8, when=None):
    return SessionCompletionEvent(
        files_scanned=max(files, scanned),
        files_cleaned=files,
        space_freed_mb=space,
        duration_minutes=1.0,
        categories=frozenset({FileCategory.OLD_FILES}),
        bulk_action=BulkAction.DELETE,
        completed_at=when or datetime(2024, 3, 4, 12, 0),
    )


@pytest.fixture
def aggregator():
    return ProgressAggregator()


class TestSessionCompletion:
    def test_first_steps_scenario(self, aggregator):
        """8 files + 5 more crosses the 10-file milestone and nothing else."""
        start = UserProgress(user_id="u1", total_files_cleaned=8, total_space_freed_mb=500, level=1)
        update = aggregator.apply_session_completion(start, _event(files=5, space=200), today=DAY)

        assert update.progress.total_files_cleaned == 13
        assert update.progress.total_space_freed_mb == 700
        assert update.progress.sessions_completed == 1
        assert [a.badge_name for a in update.achievements] == ["First Steps"]

    def test_intents_in_order(self, aggregator):
        update = aggregator.apply_session_completion(
            UserProgress(user_id="u1", total_files_cleaned=8), _event(), today=DAY
        )
        kinds = [type(i) for i in update.intents]
        assert kinds == [PersistSession, SaveProgress, RecordAchievement]
        assert update.before.total_files_cleaned == 8

    def test_counters_never_decrease(self, aggregator):
        progress = UserProgress(user_id="u1")
        for files, space in [(3, 10.0), (0, 0.0), (12, 900.0), (1, 0.5)]:
            update = aggregator.apply_session_completion(progress, _event(files=files, space=space), today=DAY)
            assert update.progress.total_files_cleaned >= progress.total_files_cleaned
            assert update.progress.total_space_freed_mb >= progress.total_space_freed_mb
            progress = update.progress

    def test_milestone_awarded_once(self, aggregator):
        progress = UserProgress(user_id="u1")
        earned: set[str] = set()
        awarded = []
        for _ in range(6):
            update = aggregator.apply_session_completion(progress, _event(files=7), earned, today=DAY)
            awarded.extend(a.badge_name for a in update.achievements)
            earned.update(a.badge_name for a in update.achievements)
            progress = update.progress
        assert awarded.count("First Steps") == 1
        assert awarded.count("Zen Desktop") == 1

    def test_level_untouched(self, aggregator):
        start = UserProgress(user_id="u1", level=3, total_points=10_000)
        update = aggregator.apply_session_completion(start, _event(files=200), today=DAY)
        assert update.progress.level == 3

    def test_does_not_touch_points(self, aggregator):
        update = aggregator.apply_session_completion(UserProgress(user_id="u1"), _event(files=20), today=DAY)
        assert update.progress.total_points == 0


class TestEvaluator:
    def test_space_maker_single_session(self):
        before = UserProgress(user_id="u1")
        after = replace(before, total_space_freed_mb=1200)
        got = AchievementEvaluator().evaluate(before, after, set(), event=_event(space=1200))
        assert "Space Maker" in [a.badge_name for a in got]

    def test_space_maker_skipped_when_earned(self):
        before = UserProgress(user_id="u1")
        after = replace(before, total_space_freed_mb=1200)
        got = AchievementEvaluator().evaluate(before, after, {"Space Maker"}, event=_event(space=1200))
        assert "Space Maker" not in [a.badge_name for a in got]

    def test_threshold_already_passed_not_awarded(self):
        """Counter already above the requirement before the change."""
        before = UserProgress(user_id="u1", total_files_cleaned=50)
        after = replace(before, total_files_cleaned=60)
        assert AchievementEvaluator().evaluate(before, after, set()) == []

    def test_week_warrior_on_seventh_day(self):
        before = UserProgress(user_id="u1", current_streak=6)
        after = replace(before, current_streak=7)
        got = AchievementEvaluator().evaluate(before, after, set())
        assert [a.badge_name for a in got] == ["Week Warrior"]

    def test_achievement_copies_badge_fields(self):
        now = datetime(2024, 1, 1)
        before = UserProgress(user_id="u1")
        after = replace(before, folders_organized=10)
        (got,) = AchievementEvaluator().evaluate(before, after, set(), now=now)
        rule = get_badge("Folder Whisperer")
        assert (got.badge_icon, got.description, got.category, got.earned_at) == (
            rule.icon,
            rule.description,
            rule.category,
            now,
        )


class TestStreak:
    def test_first_session(self):
        assert advance_streak(UserProgress(user_id="u"), DAY) == (1, 1, DAY)

    def test_same_day_unchanged(self):
        p = UserProgress(user_id="u", current_streak=3, longest_streak=5, last_session_date=DAY)
        assert advance_streak(p, DAY) == (3, 5, DAY)

    def test_next_day_extends(self):
        p = UserProgress(user_id="u", current_streak=3, longest_streak=3, last_session_date=DAY)
        assert advance_streak(p, DAY + timedelta(days=1)) == (4, 4, DAY + timedelta(days=1))

    def test_gap_restarts(self):
        p = UserProgress(user_id="u", current_streak=3, longest_streak=3, last_session_date=DAY)
        assert advance_streak(p, DAY + timedelta(days=3)) == (1, 3, DAY + timedelta(days=3))

    def test_as_of_lapsed(self):
        p = UserProgress(user_id="u", current_streak=4, last_session_date=DAY)
        assert current_streak_as_of(p, DAY + timedelta(days=1)) == 4
        assert current_streak_as_of(p, DAY + timedelta(days=2)) == 0
        assert current_streak_as_of(UserProgress(user_id="u"), DAY) == 0


class TestPoints:
    def test_points_on_lifetime_boundaries(self):
        def pts(before, after):
            return points_for_files_cleaned(
                UserProgress(user_id="u", total_files_cleaned=before),
                UserProgress(user_id="u", total_files_cleaned=after),
            )

        assert pts(0, 9) == 0
        assert pts(0, 10) == 10
        assert pts(0, 25) == 20
        assert pts(19, 21) == 10
        assert pts(10, 10) == 0

    def test_small_sessions_add_up(self, aggregator):
        """8 files then 5 more passes 10 lifetime files and earns 10 points."""
        start = UserProgress(user_id="u1", total_files_cleaned=8)
        update = aggregator.apply_session_completion(start, _event(files=5), today=DAY)
        assert points_for_files_cleaned(update.before, update.progress) == 10

    def test_five_full_mock_sessions(self, aggregator):
        progress = UserProgress(user_id="u1")
        earned = 0
        for n in range(5):
            event = SessionCompletionEvent.from_selection(MOCK_ITEMS, BulkAction.DELETE, len(MOCK_ITEMS))
            update = aggregator.apply_session_completion(progress, event, today=DAY + timedelta(days=n))
            earned += points_for_files_cleaned(update.before, update.progress)
            progress = update.progress
        assert progress.total_files_cleaned == 40
        assert earned == 40

    def test_award_adds_to_week_and_total(self, aggregator):
        update = aggregator.award(UserProgress(user_id="u"), PointReason.AI_ANALYSIS)
        assert update.progress.total_points == 25
        assert update.progress.points_this_week == 25
        assert update.progress.level == 1

    def test_negative_award_rejected(self, aggregator):
        with pytest.raises(ValueError):
            aggregator.award_points(UserProgress(user_id="u"), -5, "oops")

    def test_daily_login_once_per_day(self, aggregator):
        first = aggregator.record_daily_login(UserProgress(user_id="u"), today=DAY)
        assert first.progress.total_points == 5
        again = aggregator.record_daily_login(first.progress, today=DAY)
        assert again.intents == ()
        assert again.progress.total_points == 5

    def test_folders_organized(self, aggregator):
        start = UserProgress(user_id="u", folders_organized=9)
        update = aggregator.apply_folders_organized(start, 1)
        assert update.progress.total_points == 15
        assert [a.badge_name for a in update.achievements] == ["Folder Whisperer"]

    def test_reset_week(self, aggregator):
        update = aggregator.reset_week(UserProgress(user_id="u", points_this_week=40, total_points=90))
        assert update.progress.points_this_week == 0
        assert update.progress.total_points == 90


class TestLevelProgress:
    def test_example(self):
        assert progress_to_next_level(UserProgress(user_id="u", level=2, total_points=150)) == 0.75

    @pytest.mark.parametrize("level,points", [(1, 0), (1, 99), (1, 100), (2, 399), (5, 12345), (0, 10)])
    def test_bounds(self, level, points):
        ratio = progress_to_next_level(UserProgress(user_id="u", level=level, total_points=points))
        assert 0 <= ratio < 1

"""Tests for challenges and challenge progress."""

from datetime import date, datetime, timedelta

import pytest

from progress import Challenge, ChallengeBoard, completion_percent


def _challenge(**overrides):
    fields = dict(
        challenge_name="Clear 50 files",
        challenge_type="weekly",
        target_value=50,
        ends_at=datetime(2024, 3, 10),
    )
    fields.update(overrides)
    return Challenge(**fields)


class TestChallenge:
    def test_invalid_type(self):
        with pytest.raises(ValueError):
            _challenge(challenge_type="daily")

    def test_target_must_be_positive(self):
        with pytest.raises(ValueError):
            _challenge(target_value=0)

    def test_days_left(self):
        ch = _challenge()
        assert ch.days_left(date(2024, 3, 7)) == 3
        assert ch.days_left(date(2024, 4, 1)) == 0

    def test_completion_percent_capped(self):
        ch = _challenge()
        assert completion_percent(ch, 25) == 50.0
        assert completion_percent(ch, 80) == 100.0


class TestChallengeBoard:
    def test_create_and_list_active(self, entity_store):
        board = ChallengeBoard(entity_store, "u1")
        weekly = board.create(_challenge())
        board.create(_challenge(challenge_name="Monthly", challenge_type="monthly"))
        board.create(_challenge(challenge_name="Old", is_active=False))

        assert {c.challenge_name for c in board.active()} == {"Clear 50 files", "Monthly"}
        assert [c.id for c in board.active("weekly")] == [weekly.id]

    def test_join_once(self, entity_store):
        board = ChallengeBoard(entity_store, "u1")
        ch = board.create(_challenge())
        assert board.join(ch.id) == board.join(ch.id)
        assert board.progress(ch.id)["current_value"] == 0

    def test_join_unknown(self, entity_store):
        assert ChallengeBoard(entity_store, "u1").join("missing") is None

    def test_advance_to_completion(self, entity_store):
        board = ChallengeBoard(entity_store, "u1")
        ch = board.create(_challenge(target_value=3, ends_at=datetime.now() + timedelta(days=7)))
        board.join(ch.id)

        assert board.advance(ch.id, 2)["is_completed"] is False
        record = board.advance(ch.id, 2)
        assert record["is_completed"] is True
        assert record["current_value"] == 4
        assert board.advance(ch.id)["current_value"] == 4

    def test_advance_without_join(self, entity_store):
        board = ChallengeBoard(entity_store, "u1")
        ch = board.create(_challenge())
        assert board.advance(ch.id) is None

    def test_progress_is_per_user(self, entity_store):
        ch = ChallengeBoard(entity_store, "u1").create(_challenge())
        ChallengeBoard(entity_store, "u1").join(ch.id)
        assert ChallengeBoard(entity_store, "u2").progress(ch.id) is None

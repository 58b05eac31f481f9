"""Daily streak policy.

A streak counts calendar days with at least one completed session. A second
session on the same day leaves it unchanged, a session on the following day
extends it, and any longer gap starts over at 1.
"""

from datetime import date, timedelta
from typing import Optional

from .models import UserProgress


def advance_streak(progress: UserProgress, day: date) -> tuple[int, int, date]:
    """Return (current, longest, last_session_date) after a session on ``day``."""
    last = progress.last_session_date
    if last is not None and day <= last:
        # Same day, or an out-of-order event for a day already counted
        current = max(progress.current_streak, 1)
        return current, max(progress.longest_streak, current), last

    if last is not None and day - last == timedelta(days=1):
        current = progress.current_streak + 1
    else:
        current = 1
    return current, max(progress.longest_streak, current), day


def current_streak_as_of(progress: UserProgress, today: Optional[date] = None) -> int:
    """Streak as it stands on ``today``: 0 once a whole day has been skipped."""
    today = today or date.today()
    last = progress.last_session_date
    if last is None:
        return 0
    if today - last > timedelta(days=1):
        return 0
    return progress.current_streak

"""Side effects produced by progress operations, executed by the committer."""

from dataclasses import dataclass

from scan.models import SessionCompletionEvent

from .models import Achievement, UserProgress


@dataclass(frozen=True)
class PersistSession:
    event: SessionCompletionEvent


@dataclass(frozen=True)
class SaveProgress:
    progress: UserProgress


@dataclass(frozen=True)
class RecordAchievement:
    achievement: Achievement


Intent = PersistSession | SaveProgress | RecordAchievement

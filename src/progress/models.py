"""Data models for progress tracking and achievements."""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Optional

from shared_types import BadgeCategory, PredicateKind


def _parse_date(value) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


@dataclass(frozen=True)
class UserProgress:
    """Lifetime counters and gamification state for one user.

    ``level`` is read from storage and never derived from points here.
    """

    user_id: str
    total_files_cleaned: int = 0
    total_space_freed_mb: float = 0.0
    sessions_completed: int = 0
    folders_organized: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_session_date: Optional[date] = None
    last_login_date: Optional[date] = None
    total_points: int = 0
    points_this_week: int = 0
    level: int = 1
    id: Optional[str] = None

    def to_record(self) -> dict:
        record = asdict(self)
        record.pop("id")
        record.pop("user_id")
        for key in ("last_session_date", "last_login_date"):
            if record[key] is not None:
                record[key] = record[key].isoformat()
        return record

    @classmethod
    def from_record(cls, record: dict) -> "UserProgress":
        return cls(
            id=record.get("id"),
            user_id=record.get("user_id") or "",
            total_files_cleaned=int(record.get("total_files_cleaned", 0)),
            total_space_freed_mb=float(record.get("total_space_freed_mb", 0.0)),
            sessions_completed=int(record.get("sessions_completed", 0)),
            folders_organized=int(record.get("folders_organized", 0)),
            current_streak=int(record.get("current_streak", 0)),
            longest_streak=int(record.get("longest_streak", 0)),
            last_session_date=_parse_date(record.get("last_session_date")),
            last_login_date=_parse_date(record.get("last_login_date")),
            total_points=int(record.get("total_points", 0)),
            points_this_week=int(record.get("points_this_week", 0)),
            level=max(1, int(record.get("level", 1))),
        )


@dataclass(frozen=True)
class BadgeRule:
    """Static badge definition.

    ``counter`` names the value the predicate reads: a UserProgress field for
    crossed-threshold and streak badges, a SessionCompletionEvent field for
    single-session badges.
    """

    name: str
    icon: str
    description: str
    category: BadgeCategory
    requirement: float
    predicate: PredicateKind
    counter: str


@dataclass(frozen=True)
class Achievement:
    badge_name: str
    badge_icon: str
    description: str
    category: BadgeCategory
    earned_at: datetime = field(default_factory=datetime.now)
    id: Optional[str] = None

    @classmethod
    def from_rule(cls, rule: BadgeRule, earned_at: Optional[datetime] = None) -> "Achievement":
        return cls(
            badge_name=rule.name,
            badge_icon=rule.icon,
            description=rule.description,
            category=rule.category,
            earned_at=earned_at or datetime.now(),
        )

    def to_record(self) -> dict:
        return {
            "badge_name": self.badge_name,
            "badge_icon": self.badge_icon,
            "description": self.description,
            "category": str(self.category),
            "earned_date": self.earned_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Achievement":
        return cls(
            id=record.get("id"),
            badge_name=record["badge_name"],
            badge_icon=record.get("badge_icon", ""),
            description=record.get("description", ""),
            category=BadgeCategory(record.get("category", BadgeCategory.MILESTONE)),
            earned_at=datetime.fromisoformat(record["earned_date"]),
        )

"""Weekly and monthly challenges users can join and advance."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import structlog

from entities import EntityStore
from shared_types import EntityKind

logger = structlog.get_logger()

CHALLENGE_TYPES = ("weekly", "monthly")


@dataclass
class Challenge:
    challenge_name: str
    challenge_type: str
    target_value: int
    ends_at: datetime
    description: str = ""
    badge_icon: str = "🏆"
    is_team_challenge: bool = False
    is_active: bool = True
    id: Optional[str] = None

    def __post_init__(self):
        if self.challenge_type not in CHALLENGE_TYPES:
            raise ValueError(f"challenge_type must be one of {CHALLENGE_TYPES}")
        if self.target_value <= 0:
            raise ValueError(f"target_value must be > 0, got {self.target_value}")

    def to_record(self) -> dict:
        return {
            "challenge_name": self.challenge_name,
            "challenge_type": self.challenge_type,
            "target_value": self.target_value,
            "ends_at": self.ends_at.isoformat(),
            "description": self.description,
            "badge_icon": self.badge_icon,
            "is_team_challenge": self.is_team_challenge,
            "is_active": self.is_active,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Challenge":
        return cls(
            id=record.get("id"),
            challenge_name=record["challenge_name"],
            challenge_type=record["challenge_type"],
            target_value=int(record["target_value"]),
            ends_at=datetime.fromisoformat(record["ends_at"]),
            description=record.get("description", ""),
            badge_icon=record.get("badge_icon", "🏆"),
            is_team_challenge=bool(record.get("is_team_challenge", False)),
            is_active=bool(record.get("is_active", True)),
        )

    def days_left(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return max(0, (self.ends_at.date() - today).days)


def completion_percent(challenge: Challenge, current_value: int) -> float:
    return min(100.0, current_value / challenge.target_value * 100)


class ChallengeBoard:
    """Challenge catalogue plus one user's enrolment and progress."""

    def __init__(self, store: EntityStore, user_id: str):
        self.store = store
        self.user_id = user_id

    def create(self, challenge: Challenge) -> Challenge:
        challenge.id = self.store.create(EntityKind.CHALLENGE, challenge.to_record())
        logger.info("challenge_created", challenge_id=challenge.id, name=challenge.challenge_name)
        return challenge

    def get(self, challenge_id: str) -> Optional[Challenge]:
        record = self.store.get(EntityKind.CHALLENGE, challenge_id)
        return Challenge.from_record(record) if record else None

    def active(self, challenge_type: Optional[str] = None) -> list[Challenge]:
        match = {"is_active": True}
        if challenge_type:
            match["challenge_type"] = challenge_type
        return [Challenge.from_record(r) for r in self.store.filter(EntityKind.CHALLENGE, **match)]

    def join(self, challenge_id: str) -> Optional[str]:
        """Enrol once. Returns the progress record id, or None for unknown challenges."""
        if self.get(challenge_id) is None:
            return None
        progress_id, _ = self.store.create_unique(
            EntityKind.CHALLENGE_PROGRESS,
            challenge_id,
            {"challenge_id": challenge_id, "current_value": 0, "is_completed": False},
            user_id=self.user_id,
        )
        return progress_id

    def progress(self, challenge_id: str) -> Optional[dict]:
        return self.store.first(
            EntityKind.CHALLENGE_PROGRESS, user_id=self.user_id, challenge_id=challenge_id
        )

    def advance(self, challenge_id: str, amount: int = 1) -> Optional[dict]:
        """Add to the user's value; marks completion at the target."""
        challenge = self.get(challenge_id)
        record = self.progress(challenge_id)
        if challenge is None or record is None:
            return None
        if record["is_completed"]:
            return record

        value = int(record["current_value"]) + amount
        fields = {"current_value": value, "is_completed": value >= challenge.target_value}
        self.store.update(EntityKind.CHALLENGE_PROGRESS, record["id"], fields)
        if fields["is_completed"]:
            logger.info("challenge_completed", user_id=self.user_id, challenge_id=challenge_id)
        record.update(fields)
        return record

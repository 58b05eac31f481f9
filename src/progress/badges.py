"""The fixed badge table."""

from shared_types import BadgeCategory, PredicateKind

from .models import BadgeRule

BADGE_RULES: tuple[BadgeRule, ...] = (
    BadgeRule(
        name="First Steps",
        icon="🌱",
        description="Clean your first 10 files",
        category=BadgeCategory.MILESTONE,
        requirement=10,
        predicate=PredicateKind.CROSSED_THRESHOLD,
        counter="total_files_cleaned",
    ),
    BadgeRule(
        name="Space Maker",
        icon="🌟",
        description="Free over 1GB in a single session",
        category=BadgeCategory.CLEANING,
        requirement=1000,
        predicate=PredicateKind.SINGLE_SESSION,
        counter="space_freed_mb",
    ),
    BadgeRule(
        name="Zen Desktop",
        icon="🧘",
        description="Complete 5 cleaning sessions",
        category=BadgeCategory.CONSISTENCY,
        requirement=5,
        predicate=PredicateKind.CROSSED_THRESHOLD,
        counter="sessions_completed",
    ),
    BadgeRule(
        name="Folder Whisperer",
        icon="📁",
        description="Organize 10 folders",
        category=BadgeCategory.ORGANIZING,
        requirement=10,
        predicate=PredicateKind.CROSSED_THRESHOLD,
        counter="folders_organized",
    ),
    BadgeRule(
        name="Digital Minimalist",
        icon="✨",
        description="Clean 100 files total",
        category=BadgeCategory.MILESTONE,
        requirement=100,
        predicate=PredicateKind.CROSSED_THRESHOLD,
        counter="total_files_cleaned",
    ),
    BadgeRule(
        name="Week Warrior",
        icon="🔥",
        description="Maintain a 7-day cleaning streak",
        category=BadgeCategory.CONSISTENCY,
        requirement=7,
        predicate=PredicateKind.STREAK,
        counter="current_streak",
    ),
    BadgeRule(
        name="Space Guardian",
        icon="🛡️",
        description="Free over 10GB total",
        category=BadgeCategory.MILESTONE,
        requirement=10000,
        predicate=PredicateKind.CROSSED_THRESHOLD,
        counter="total_space_freed_mb",
    ),
    BadgeRule(
        name="Organization Master",
        icon="👑",
        description="Create 20 organized folders",
        category=BadgeCategory.ORGANIZING,
        requirement=20,
        predicate=PredicateKind.CROSSED_THRESHOLD,
        counter="folders_organized",
    ),
)

BADGES_BY_NAME = {rule.name: rule for rule in BADGE_RULES}


def get_badge(name: str) -> BadgeRule | None:
    return BADGES_BY_NAME.get(name)

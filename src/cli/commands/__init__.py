"""CLI command modules."""

from .challenges import challenges
from .progress import badges, history, leaderboard, points, progress
from .rules import rules
from .scan import scan
from .suggest import prefs, suggest

__all__ = [
    "scan",
    "progress",
    "badges",
    "history",
    "leaderboard",
    "points",
    "rules",
    "challenges",
    "suggest",
    "prefs",
]

"""Aggregate statistics over persisted cleaning sessions."""

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class SessionSummary:
    sessions: int = 0
    files_cleaned: int = 0
    files_scanned: int = 0
    space_freed_mb: float = 0.0
    avg_duration_minutes: float = 0.0
    by_category: dict[str, int] = field(default_factory=dict)
    space_by_action: dict[str, float] = field(default_factory=dict)

    @property
    def clean_rate(self) -> float:
        """Share of scanned files that were cleaned."""
        if not self.files_scanned:
            return 0.0
        return self.files_cleaned / self.files_scanned


def summarize_sessions(records: list[dict]) -> SessionSummary:
    if not records:
        return SessionSummary()

    categories: Counter[str] = Counter()
    space_by_action: dict[str, float] = {}
    durations = []
    summary = SessionSummary(sessions=len(records))

    for r in records:
        summary.files_cleaned += int(r.get("files_cleaned", 0))
        summary.files_scanned += int(r.get("files_scanned", 0))
        freed = float(r.get("space_freed_mb", 0.0))
        summary.space_freed_mb += freed
        action = r.get("bulk_action", "delete")
        space_by_action[action] = space_by_action.get(action, 0.0) + freed
        categories.update(r.get("categories_organized", []))
        durations.append(float(r.get("session_duration_minutes", 0.0)))

    summary.avg_duration_minutes = round(sum(durations) / len(durations), 2)
    summary.by_category = dict(categories.most_common())
    summary.space_by_action = space_by_action
    return summary

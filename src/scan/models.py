"""Data models for the scan/clean pipeline."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

from shared_types import BulkAction, FileCategory, MediaKind

# Freed-space accounting for "compress": the selection counts as 40% of its size.
COMPRESS_FREED_FRACTION = 0.4


@dataclass(frozen=True)
class FlaggedItem:
    """One file-like entity surfaced by a scan."""

    id: str
    name: str
    size_mb: float
    category: FileCategory
    reason: str = ""
    media_kind: MediaKind = MediaKind.DOCUMENT

    def __post_init__(self):
        if self.size_mb < 0:
            raise ValueError(f"size_mb must be >= 0, got {self.size_mb}")
        # Coerce plain strings from catalogs / storage; raises on unknown values
        object.__setattr__(self, "category", FileCategory(self.category))
        object.__setattr__(self, "media_kind", MediaKind(self.media_kind))


@dataclass
class CleaningRule:
    """User-authored or AI-suggested predicate for auto-selecting files."""

    name: str
    file_extension: str
    action: BulkAction = BulkAction.DELETE
    older_than_days: Optional[int] = None
    larger_than_mb: Optional[float] = None
    folder_path: Optional[str] = None
    is_active: bool = True
    id: Optional[str] = None

    def __post_init__(self):
        if not self.file_extension:
            raise ValueError("file_extension must not be empty")
        if self.older_than_days is not None and self.older_than_days < 0:
            raise ValueError(f"older_than_days must be >= 0, got {self.older_than_days}")
        if self.larger_than_mb is not None and self.larger_than_mb < 0:
            raise ValueError(f"larger_than_mb must be >= 0, got {self.larger_than_mb}")
        self.action = BulkAction(self.action)

    def to_record(self) -> dict:
        record = asdict(self)
        record.pop("id")
        record["action"] = str(self.action)
        return record

    @classmethod
    def from_record(cls, record: dict) -> "CleaningRule":
        return cls(
            id=record.get("id"),
            name=record.get("name", ""),
            file_extension=record.get("file_extension", ""),
            action=record.get("action", BulkAction.DELETE),
            older_than_days=record.get("older_than_days"),
            larger_than_mb=record.get("larger_than_mb"),
            folder_path=record.get("folder_path"),
            is_active=bool(record.get("is_active", True)),
        )


@dataclass(frozen=True)
class SessionCompletionEvent:
    """Emitted exactly once per completed clean cycle."""

    files_scanned: int
    files_cleaned: int
    space_freed_mb: float
    duration_minutes: float
    categories: frozenset[FileCategory]
    bulk_action: BulkAction = BulkAction.DELETE
    completed_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.files_cleaned < 0 or self.files_scanned < 0:
            raise ValueError("file counts must be >= 0")
        if self.files_cleaned > self.files_scanned:
            raise ValueError(
                f"files_cleaned ({self.files_cleaned}) exceeds files_scanned ({self.files_scanned})"
            )
        if self.space_freed_mb < 0:
            raise ValueError(f"space_freed_mb must be >= 0, got {self.space_freed_mb}")

    @classmethod
    def from_selection(
        cls,
        selection: tuple[FlaggedItem, ...],
        bulk_action: BulkAction,
        files_scanned: int,
        duration_minutes: float = 0.0,
    ) -> "SessionCompletionEvent":
        total_size = sum(item.size_mb for item in selection)
        if bulk_action == BulkAction.COMPRESS:
            space_freed = total_size * COMPRESS_FREED_FRACTION
        else:
            space_freed = total_size
        return cls(
            files_scanned=files_scanned,
            files_cleaned=len(selection),
            space_freed_mb=space_freed,
            duration_minutes=duration_minutes,
            categories=frozenset(item.category for item in selection),
            bulk_action=bulk_action,
        )

    def to_record(self) -> dict:
        return {
            "files_scanned": self.files_scanned,
            "files_cleaned": self.files_cleaned,
            "space_freed_mb": self.space_freed_mb,
            "session_duration_minutes": self.duration_minutes,
            "categories_organized": sorted(str(c) for c in self.categories),
            "bulk_action": str(self.bulk_action),
            "completed_at": self.completed_at.isoformat(),
        }

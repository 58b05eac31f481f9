"""Candidate-item sources for the scan step.

The state machine only needs ``items()``; a filesystem walker can replace the
mock catalog without touching it.
"""

from typing import Iterable, Protocol

from shared_types import FileCategory, MediaKind

from .models import FlaggedItem


class CandidateCatalog(Protocol):
    def items(self) -> Iterable[FlaggedItem]: ...


MOCK_ITEMS: tuple[FlaggedItem, ...] = (
    FlaggedItem(
        id="1",
        name="old-presentation-2020.pptx",
        size_mb=45,
        category=FileCategory.OLD_FILES,
        reason="This presentation is over 3 years old and hasn't been opened recently",
        media_kind=MediaKind.DOCUMENT,
    ),
    FlaggedItem(
        id="2",
        name="screenshot-2019-backup.png",
        size_mb=12,
        category=FileCategory.SCREENSHOTS,
        reason="Old screenshot from 2019 that might no longer be needed",
        media_kind=MediaKind.IMAGE,
    ),
    FlaggedItem(
        id="3",
        name="temp-download-cache",
        size_mb=234,
        category=FileCategory.TEMPORARY_FILES,
        reason="Temporary files that are safe to remove to free up space",
        media_kind=MediaKind.CACHE,
    ),
    FlaggedItem(
        id="4",
        name="duplicate-photo-1.jpg",
        size_mb=8,
        category=FileCategory.DUPLICATES,
        reason="This appears to be a duplicate of another photo in your library",
        media_kind=MediaKind.IMAGE,
    ),
    FlaggedItem(
        id="5",
        name="browser-cache-2023",
        size_mb=567,
        category=FileCategory.CACHE_FILES,
        reason="Browser cache files that can be safely removed",
        media_kind=MediaKind.CACHE,
    ),
    FlaggedItem(
        id="6",
        name="old-project-backup",
        size_mb=123,
        category=FileCategory.OLD_BACKUPS,
        reason="Backup files from completed projects that could be archived",
        media_kind=MediaKind.ARCHIVE,
    ),
    FlaggedItem(
        id="7",
        name="unused-app-data",
        size_mb=89,
        category=FileCategory.APP_DATA,
        reason="Leftover data from apps you no longer use",
        media_kind=MediaKind.CACHE,
    ),
    FlaggedItem(
        id="8",
        name="temp-video-render.mp4",
        size_mb=456,
        category=FileCategory.TEMPORARY_FILES,
        reason="Temporary video file that's no longer needed",
        media_kind=MediaKind.VIDEO,
    ),
)


class MockCatalog:
    """Fixed list of simulated findings."""

    def __init__(self, items: Iterable[FlaggedItem] = MOCK_ITEMS):
        self._items = tuple(items)
        ids = [item.id for item in self._items]
        if len(ids) != len(set(ids)):
            raise ValueError("catalog item ids must be unique")

    def items(self) -> tuple[FlaggedItem, ...]:
        return self._items

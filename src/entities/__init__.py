"""Generic entity persistence: the store every domain record goes through."""

from .store import EntityStore, EntityStoreError

__all__ = ["EntityStore", "EntityStoreError"]

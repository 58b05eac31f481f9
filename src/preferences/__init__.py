"""Learned-preference log."""

from .recorder import MAX_LEARNED_PREFERENCES, PreferenceRecorder, append_preference, item_action_entry

__all__ = [
    "MAX_LEARNED_PREFERENCES",
    "PreferenceRecorder",
    "append_preference",
    "item_action_entry",
]

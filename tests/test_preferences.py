"""Tests for the learned-preference log."""

from datetime import datetime

from preferences import MAX_LEARNED_PREFERENCES, PreferenceRecorder, append_preference, item_action_entry
from scan import MOCK_ITEMS
from shared_types import BulkAction


class TestAppendPreference:
    def test_keeps_newest(self):
        entries = [{"n": i} for i in range(MAX_LEARNED_PREFERENCES)]
        result = append_preference(entries, {"n": "new"})
        assert len(result) == MAX_LEARNED_PREFERENCES
        assert result[0] == {"n": 1}
        assert result[-1] == {"n": "new"}

    def test_input_not_mutated(self):
        entries = [{"n": 0}]
        append_preference(entries, {"n": 1})
        assert entries == [{"n": 0}]

    def test_zero_limit(self):
        assert append_preference([{"n": 0}], {"n": 1}, limit=0) == []


def test_item_action_entry():
    entry = item_action_entry(MOCK_ITEMS[1], BulkAction.ARCHIVE, now=datetime(2024, 1, 2, 3, 4))
    assert entry == {
        "action": "archive",
        "file_type": "image",
        "category": "Screenshots",
        "timestamp": "2024-01-02T03:04:00",
    }


class TestPreferenceRecorder:
    def test_truncates_at_fifty(self, entity_store):
        recorder = PreferenceRecorder(entity_store, "u1")
        for i in range(55):
            recorder.record_action("bulk_archive", files_count=i)

        entries = recorder.entries()
        assert len(entries) == 50
        assert entries[0]["files_count"] == 5
        assert entries[-1]["files_count"] == 54

    def test_single_record(self, entity_store):
        recorder = PreferenceRecorder(entity_store, "u1")
        recorder.record_item_action(MOCK_ITEMS[0], BulkAction.DELETE)
        recorder.record_item_action(MOCK_ITEMS[1], BulkAction.COMPRESS)
        assert len(entity_store.filter("learned_preferences", user_id="u1")) == 1
        assert [e["action"] for e in recorder.entries()] == ["delete", "compress"]

    def test_recent(self, entity_store):
        recorder = PreferenceRecorder(entity_store, "u1", limit=10)
        for i in range(4):
            recorder.record_action("x", n=i)
        assert [e["n"] for e in recorder.recent(2)] == [2, 3]
        assert recorder.recent(0) == []

    def test_empty(self, entity_store):
        assert PreferenceRecorder(entity_store, "nobody").entries() == []

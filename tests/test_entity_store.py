"""Tests for the SQLite entity store."""

from entities import EntityStore
from shared_types import EntityKind


class TestEntityStore:
    def test_create_and_get(self, entity_store):
        entity_id = entity_store.create(EntityKind.CLEANING_RULE, {"name": "tmp"}, user_id="u1")
        record = entity_store.get(EntityKind.CLEANING_RULE, entity_id)
        assert record["name"] == "tmp"
        assert record["id"] == entity_id
        assert record["user_id"] == "u1"
        assert record["created_at"]

    def test_get_wrong_kind(self, entity_store):
        entity_id = entity_store.create(EntityKind.CLEANING_RULE, {"name": "tmp"})
        assert entity_store.get(EntityKind.CHALLENGE, entity_id) is None

    def test_update_merges(self, entity_store):
        entity_id = entity_store.create(EntityKind.CHALLENGE, {"a": 1, "b": 2})
        assert entity_store.update(EntityKind.CHALLENGE, entity_id, {"b": 3, "c": 4})
        record = entity_store.get(EntityKind.CHALLENGE, entity_id)
        assert (record["a"], record["b"], record["c"]) == (1, 3, 4)

    def test_update_missing(self, entity_store):
        assert entity_store.update(EntityKind.CHALLENGE, "nope", {"a": 1}) is False

    def test_delete(self, entity_store):
        entity_id = entity_store.create(EntityKind.CHALLENGE, {})
        assert entity_store.delete(EntityKind.CHALLENGE, entity_id)
        assert not entity_store.delete(EntityKind.CHALLENGE, entity_id)

    def test_filter_by_user_and_field(self, entity_store):
        entity_store.create(EntityKind.CLEANING_RULE, {"is_active": True}, user_id="u1")
        entity_store.create(EntityKind.CLEANING_RULE, {"is_active": False}, user_id="u1")
        entity_store.create(EntityKind.CLEANING_RULE, {"is_active": True}, user_id="u2")

        assert len(entity_store.filter(EntityKind.CLEANING_RULE)) == 3
        assert len(entity_store.filter(EntityKind.CLEANING_RULE, user_id="u1")) == 2
        assert len(entity_store.filter(EntityKind.CLEANING_RULE, user_id="u1", is_active=True)) == 1

    def test_filter_oldest_first_with_limit(self, entity_store):
        ids = [entity_store.create(EntityKind.CHALLENGE, {"n": n}) for n in range(3)]
        rows = entity_store.filter(EntityKind.CHALLENGE, limit=2)
        assert [r["id"] for r in rows] == ids[:2]

    def test_first_none(self, entity_store):
        assert entity_store.first(EntityKind.USER_PROGRESS, user_id="ghost") is None


class TestCreateUnique:
    def test_second_insert_returns_existing(self, entity_store):
        first_id, created = entity_store.create_unique(EntityKind.ACHIEVEMENT, "First Steps", {"v": 1}, user_id="u1")
        again_id, created_again = entity_store.create_unique(
            EntityKind.ACHIEVEMENT, "First Steps", {"v": 2}, user_id="u1"
        )
        assert created is True
        assert created_again is False
        assert again_id == first_id
        assert entity_store.get(EntityKind.ACHIEVEMENT, first_id)["v"] == 1
        assert len(entity_store.filter(EntityKind.ACHIEVEMENT, user_id="u1")) == 1

    def test_scoped_per_user(self, entity_store):
        _, a = entity_store.create_unique(EntityKind.ACHIEVEMENT, "First Steps", {}, user_id="u1")
        _, b = entity_store.create_unique(EntityKind.ACHIEVEMENT, "First Steps", {}, user_id="u2")
        assert a and b

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "d" / "x.db"
        EntityStore(path).create_unique(EntityKind.ACHIEVEMENT, "k", {}, user_id="u")
        _, created = EntityStore(path).create_unique(EntityKind.ACHIEVEMENT, "k", {}, user_id="u")
        assert created is False

"""Tests for firebase_rest.database.snapshot."""

import dataclasses

import pytest

from firebase_rest.database.snapshot import DataSnapshot


class TestDataSnapshot:
    def test_null_value_does_not_exist(self, db):
        snapshot = DataSnapshot(db.ref("missing"), None)
        assert snapshot.exists() is False
        assert snapshot.has_children() is False
        assert snapshot.val() is None

    def test_scalar_exists_without_children(self, db):
        snapshot = DataSnapshot(db.ref("count"), 0)
        assert snapshot.exists() is True
        assert snapshot.has_children() is False
        assert snapshot.num_children() == 0

    def test_false_exists(self, db):
        assert DataSnapshot(db.ref("flag"), False).exists() is True

    def test_object_has_children(self, db):
        snapshot = DataSnapshot(db.ref("users"), {"ada": {"age": 36}, "alan": {"age": 41}})
        assert snapshot.has_children() is True
        assert snapshot.num_children() == 2
        assert snapshot.has_child("ada/age")
        assert not snapshot.has_child("grace")

    def test_key_is_full_path(self, db):
        snapshot = DataSnapshot(db.ref("users/ada"), {})
        assert snapshot.key == "/users/ada"
        assert snapshot.ref.key == "ada"
        assert snapshot.path == "/users/ada"
        assert snapshot.ref.path == "/users/ada"

    def test_child_snapshot(self, db):
        snapshot = DataSnapshot(db.ref("users"), {"ada": {"age": 36}})
        child = snapshot.child("ada/age")
        assert child.val() == 36
        assert child.key == "/users/ada/age"
        assert child.path == "/users/ada/age"
        assert snapshot.child("nobody").exists() is False

    def test_list_children(self, db):
        snapshot = DataSnapshot(db.ref("items"), ["a", None, "c"])
        assert snapshot.child("2").val() == "c"
        assert snapshot.child("7").val() is None
        assert snapshot.num_children() == 2

    def test_for_each_visits_children_and_stops(self, db):
        snapshot = DataSnapshot(db.ref("scores"), {"a": 1, "b": 2, "c": 3})
        seen = []

        stopped = snapshot.for_each(lambda child: seen.append((child.ref.key, child.val())))
        assert stopped is False
        assert seen == [("a", 1), ("b", 2), ("c", 3)]

        seen.clear()
        stopped = snapshot.for_each(lambda child: seen.append(child.ref.key) or child.ref.key == "b")
        assert stopped is True
        assert seen == ["a", "b"]

    def test_immutable(self, db):
        snapshot = DataSnapshot(db.ref("a"), 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot._value = 2

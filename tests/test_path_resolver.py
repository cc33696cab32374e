"""Tests for path splitting and the directory chain resolver."""

import pytest

from cabinet.exceptions import BadRequestError, ConflictError
from cabinet.models import Directory
from cabinet.repositories.path_resolver import (
    MAX_NAME_LENGTH,
    PathResolver,
    is_root,
    split_components,
    split_path,
)


class TestSplitting:

    def test_ignores_empty_dot_and_dotdot_components(self):
        assert split_components("/a//./b/../c/") == ["a", "b", "c"]

    def test_split_path_returns_parents_and_name(self):
        assert split_path("a/b/c.txt") == (["a", "b"], "c.txt")
        assert split_path("c.txt") == ([], "c.txt")

    def test_split_path_without_file_name(self):
        assert split_path("a/b/") == (["a", "b"], None)
        assert split_path("a/..") == (["a"], None)
        assert split_path("") == ([], None)

    def test_is_root(self):
        assert is_root("")
        assert is_root("/")
        assert is_root("./")
        assert not is_root("a")


class TestResolver:

    def test_resolve_missing_path_creates_nothing(self, db):
        resolver = PathResolver(db)
        assert resolver.resolve("a/b") is None
        assert db.query(Directory).count() == 0

    def test_ensure_then_resolve_yields_same_id(self, db):
        resolver = PathResolver(db)
        created = resolver.ensure("a/b/c")
        assert created is not None
        assert resolver.resolve("a/b/c") == created
        assert resolver.ensure("/a/./b/c/") == created
        assert db.query(Directory).count() == 3

    def test_ensure_reuses_existing_prefix(self, db):
        resolver = PathResolver(db)
        ab = resolver.ensure("a/b")
        resolver.ensure("a/x")
        assert resolver.resolve("a/b") == ab
        assert db.query(Directory).count() == 3

    def test_root_is_the_none_sentinel(self, db):
        resolver = PathResolver(db)
        assert resolver.ensure("") is None
        assert resolver.ensure("/./") is None
        assert db.query(Directory).count() == 0

    def test_same_name_under_different_parents(self, db):
        resolver = PathResolver(db)
        first = resolver.ensure("x/common")
        second = resolver.ensure("y/common")
        assert first != second

    def test_insert_conflict_returns_existing_row(self, db):
        resolver = PathResolver(db)
        existing = resolver.ensure("a")
        # Simulates a concurrent creator that won the race after our lookup.
        assert resolver._insert("a", None) == existing
        assert db.query(Directory).count() == 1

    def test_insert_conflict_with_invisible_winner_is_409(self, db, monkeypatch):
        resolver = PathResolver(db)
        resolver.ensure("a")
        # The winning row is outside this transaction's snapshot.
        monkeypatch.setattr(resolver, "_lookup", lambda name, parent: None)
        with pytest.raises(ConflictError) as exc_info:
            resolver._insert("a", None)
        assert exc_info.value.status_code == 409
        assert db.query(Directory).count() == 1

    def test_ensure_rejects_overlong_component(self, db):
        resolver = PathResolver(db)
        with pytest.raises(BadRequestError):
            resolver.ensure("a/" + "x" * (MAX_NAME_LENGTH + 1))
        assert resolver.resolve("a") is None

    def test_ensure_accepts_component_at_max_length(self, db):
        resolver = PathResolver(db)
        assert resolver.ensure("x" * MAX_NAME_LENGTH) is not None

    def test_path_of_walks_parent_chain(self, db):
        resolver = PathResolver(db)
        leaf = resolver.ensure("a/b/c")
        assert resolver.path_of(leaf) == "a/b/c"
        assert resolver.path_of(None) == ""

"""Tests for DirectoryRepository."""

import pytest

from cabinet.exceptions import InternalError, NotFoundError
from cabinet.repositories import ById, ByPath, DirectoryRepository, FileRepository
from tests.conftest import make_file


class TestDirectoryRepository:

    def test_create_and_fetch_by_path_and_id(self, db):
        repo = DirectoryRepository(db)
        dir_id = repo.create("a/b")

        by_path = repo.fetch(ByPath("a/b"))
        assert by_path.id == dir_id
        assert by_path.name == "b"
        assert repo.fetch(ById(dir_id)) == by_path
        assert repo.fetch("a/b") == by_path

    def test_fetch_missing_raises_not_found(self, db):
        repo = DirectoryRepository(db)
        with pytest.raises(NotFoundError):
            repo.fetch(ByPath("nope"))
        with pytest.raises(NotFoundError):
            repo.fetch(ById(12345))

    def test_exists(self, db):
        repo = DirectoryRepository(db)
        repo.create("a")
        assert repo.exists(ByPath("a"))
        assert not repo.exists(ByPath("b"))
        assert not repo.exists(ById(999))

    def test_create_existing_returns_same_id(self, db):
        repo = DirectoryRepository(db)
        assert repo.create("a/b") == repo.create("a/b")

    def test_create_root_is_internal_error(self, db):
        with pytest.raises(InternalError):
            DirectoryRepository(db).create("/")

    def test_content_lists_dirs_then_files_sorted(self, db):
        dirs = DirectoryRepository(db)
        files = FileRepository(db)
        dirs.create("top/zeta")
        dirs.create("top/alpha")
        files.create(make_file("top/b.txt"))
        files.create(make_file("top/a.txt"))

        names = [str(entry) for entry in dirs.content(ByPath("top"))]
        assert names == ["alpha/", "zeta/", "a.txt", "b.txt"]

    def test_content_of_root(self, db):
        dirs = DirectoryRepository(db)
        dirs.create("d")
        FileRepository(db).create(make_file("f.txt"))
        assert [str(e) for e in dirs.content(ByPath(""))] == ["d/", "f.txt"]

    def test_content_of_missing_directory_raises(self, db):
        with pytest.raises(NotFoundError):
            DirectoryRepository(db).content(ByPath("missing"))

    def test_delete_removes_one_row(self, db):
        repo = DirectoryRepository(db)
        repo.create("a/b")
        assert repo.delete(ByPath("a/b")) == 1
        assert repo.exists(ByPath("a"))
        assert not repo.exists(ByPath("a/b"))
        assert repo.delete(ByPath("a/b")) == 0

    def test_descendant_ids(self, db):
        repo = DirectoryRepository(db)
        leaf = repo.create("a/b/c")
        top = repo.get_id(ByPath("a"))
        mid = repo.get_id(ByPath("a/b"))
        repo.create("other")
        assert sorted(repo.descendant_ids(top)) == sorted([top, mid, leaf])

    def test_count(self, db):
        repo = DirectoryRepository(db)
        repo.create("a/b/c")
        assert repo.count() == 3

"""Resolve slash-delimited paths against the directory parent-pointer table.

A path is walked one component at a time, carrying the id of the directory
reached so far. ``None`` stands for the root, which has no row of its own.
Components that are empty, ``.`` or ``..`` are skipped.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import BadRequestError, ConflictError, InternalError
from ..models.directory import Directory
from .base import parent_is

logger = logging.getLogger(__name__)

_IGNORED_COMPONENTS = frozenset({"", ".", ".."})

# Width of the name columns on directory and file
MAX_NAME_LENGTH = 255

PathLike = Union[str, Sequence[str]]


def split_components(path: str) -> List[str]:
    """Normal components of *path*: ``"/a//./b/"`` -> ``["a", "b"]``."""
    return [part for part in path.split("/") if part not in _IGNORED_COMPONENTS]


def split_path(path: str) -> Tuple[List[str], Optional[str]]:
    """Split a file path into (parent components, file name).

    The name is None when the path has no final name component, e.g. it ends
    with a separator or with ``.``/``..``.
    """
    head, _, last = path.rpartition("/")
    name = None if last in _IGNORED_COMPONENTS else last
    return split_components(head), name


def is_root(path: str) -> bool:
    return not split_components(path)


def check_name(name: str) -> str:
    """Reject a single path component that does not fit the name column."""
    if len(name) > MAX_NAME_LENGTH:
        raise BadRequestError(
            f"Path component longer than {MAX_NAME_LENGTH} characters",
            details={"component": name[:32] + "...", "max_length": MAX_NAME_LENGTH},
        )
    return name


def _components(path: PathLike) -> List[str]:
    if isinstance(path, str):
        return split_components(path)
    return [part for part in path if part not in _IGNORED_COMPONENTS]


class PathResolver:
    """Look up or create chains of directories by path."""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, path: PathLike) -> Optional[int]:
        """Id of the directory at *path*, or None if any component is missing.

        Never creates anything. The root path also yields None, since the
        root is not a row.
        """
        parent: Optional[int] = None
        for name in _components(path):
            parent = self._lookup(name, parent)
            if parent is None:
                return None
        return parent

    def ensure(self, path: PathLike) -> Optional[int]:
        """Id of the directory at *path*, creating missing components on the way.

        A path without normal components returns None (the root sentinel).
        """
        names = [check_name(name) for name in _components(path)]
        parent: Optional[int] = None
        for name in names:
            found = self._lookup(name, parent)
            if found is None:
                found = self._insert(name, parent)
            parent = found
        return parent

    def path_of(self, dir_id: Optional[int]) -> str:
        """Full path of a directory, built by walking up its parent chain."""
        names: List[str] = []
        current = dir_id
        while current is not None:
            row = (
                self.db.query(Directory.name, Directory.parent)
                .filter(Directory.id == current)
                .first()
            )
            if row is None:
                raise InternalError(f"Broken directory chain at id {current}")
            names.append(row.name)
            current = row.parent
        return "/".join(reversed(names))

    def _lookup(self, name: str, parent: Optional[int]) -> Optional[int]:
        return (
            self.db.query(Directory.id)
            .filter(Directory.name == name, parent_is(Directory.parent, parent))
            .scalar()
        )

    def _insert(self, name: str, parent: Optional[int]) -> int:
        """Insert one directory row inside a savepoint.

        A concurrent creator may have inserted the same (name, parent) since
        the lookup. The unique constraint rejects ours, and the row that won
        is used instead.

        Under SERIALIZABLE the winning row may have committed after our
        snapshot and stay invisible to the retry lookup. That surfaces as a
        409 and the client resubmits.
        """
        directory = Directory(name=name, parent=parent)
        try:
            with self.db.begin_nested():
                self.db.add(directory)
        except IntegrityError:
            existing = self._lookup(name, parent)
            if existing is None:
                raise ConflictError(
                    f"Directory was created concurrently: {name}",
                    details={"dir_name": name, "parent": parent},
                )
            logger.debug(
                "Directory created concurrently",
                extra={"dir_name": name, "parent": parent},
            )
            return existing
        return directory.id

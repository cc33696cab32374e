"""Repository for directory rows."""

import logging
from collections import deque
from typing import List, Optional, Union

from sqlalchemy import delete

from ..exceptions import InternalError, NotFoundError
from ..models.directory import Directory
from ..models.file import File
from ..schemas.directory import DirectoryEntry, DirectoryRecord, Entry, FileEntry
from .base import BaseRepository, parent_is
from .identifiers import ById, ByPath, PathIdentifier, as_path_identifier, describe
from .path_resolver import PathResolver, is_root

logger = logging.getLogger(__name__)


def _to_record(row) -> DirectoryRecord:
    return DirectoryRecord(id=row.id, name=row.name, parent=row.parent)


class DirectoryRepository(BaseRepository[Directory]):
    """Data access layer for directories.

    Directories are never renamed. They are created on demand by any
    operation that needs a parent chain and removed one at a time. Whether a
    directory may be removed is decided by the caller.
    """

    model_class = Directory
    resource_name = "Directory"

    def __init__(self, db):
        super().__init__(db)
        self.paths = PathResolver(db)

    def get_id(self, ident: Union[PathIdentifier, int, str]) -> Optional[int]:
        """Row id for *ident*, or None when it does not exist.

        The root path has no row and also yields None; use ``is_root`` to
        tell the two apart.
        """
        ident = as_path_identifier(ident)
        if isinstance(ident, ById):
            return ident.id if self._id_exists(ident.id) else None
        return self.paths.resolve(ident.path)

    def exists(self, ident: Union[PathIdentifier, int, str]) -> bool:
        return self.get_id(ident) is not None

    def fetch(self, ident: Union[PathIdentifier, int, str]) -> DirectoryRecord:
        ident = as_path_identifier(ident)
        dir_id = self.get_id(ident)
        row = None
        if dir_id is not None:
            row = self._fetch_one(
                self.db.query(Directory.id, Directory.name, Directory.parent)
                .filter(Directory.id == dir_id)
            )
        if row is None:
            raise NotFoundError(self.resource_name, describe(ident))
        return _to_record(row)

    def path_of(self, dir_id: int) -> str:
        return self.paths.path_of(dir_id)

    def create(self, path: str) -> int:
        """Create the directory at *path* and any missing ancestors.

        Creating a directory that already exists returns its id.
        """
        dir_id = self.paths.ensure(path)
        if dir_id is None:
            raise InternalError(f"Cannot create the root directory: {path!r}")
        return dir_id

    def content(self, ident: Union[PathIdentifier, int, str]) -> List[Entry]:
        """Immediate children: subdirectories by name, then files by name."""
        ident = as_path_identifier(ident)
        if isinstance(ident, ByPath) and is_root(ident.path):
            parent = None
        else:
            parent = self.get_id(ident)
            if parent is None:
                raise NotFoundError(self.resource_name, describe(ident))

        dirs = (
            self.db.query(Directory.id, Directory.name)
            .filter(parent_is(Directory.parent, parent))
            .order_by(Directory.name)
            .all()
        )
        files = (
            self.db.query(File.id, File.name)
            .filter(parent_is(File.parent, parent))
            .order_by(File.name)
            .all()
        )
        entries: List[Entry] = [DirectoryEntry(id=row.id, name=row.name) for row in dirs]
        entries.extend(FileEntry(id=row.id, name=row.name) for row in files)
        return entries

    def delete(self, ident: Union[PathIdentifier, int, str]) -> int:
        """Delete exactly one directory row. Emptiness is the caller's check."""
        dir_id = self.get_id(ident)
        if dir_id is None:
            return 0
        count = self._execute(delete(Directory).where(Directory.id == dir_id))
        logger.debug("Deleted directory", extra={"dir_id": dir_id})
        return count

    def descendant_ids(self, dir_id: int) -> List[int]:
        """*dir_id* and every directory below it, at any depth."""
        found = [dir_id]
        queue = deque([dir_id])
        while queue:
            current = queue.popleft()
            children = [
                row.id
                for row in self.db.query(Directory.id).filter(Directory.parent == current)
            ]
            found.extend(children)
            queue.extend(children)
        return found

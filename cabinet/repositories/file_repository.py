"""Repository for file rows.

A file row stores only its own name and the id of its parent directory.
The full path is rebuilt from the parent chain every time a record is read.
"""

import logging
from typing import Optional, Tuple, Union

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError

from ..core.timestamps import as_utc
from ..exceptions import BadRequestError, NotFoundError
from ..models.file import File
from ..schemas.file import FileRecord, NewFile
from .base import BaseRepository, parent_is
from .directory_repository import DirectoryRepository
from .identifiers import ById, PathIdentifier, as_path_identifier, describe
from .path_resolver import check_name, split_path

logger = logging.getLogger(__name__)


def _join(parent_path: str, name: str) -> str:
    return f"{parent_path}/{name}" if parent_path else name


class FileRepository(BaseRepository[File]):
    """Data access layer for files."""

    model_class = File
    resource_name = "File"

    def __init__(self, db):
        super().__init__(db)
        self.dirs = DirectoryRepository(db)

    def _to_record(self, row) -> FileRecord:
        return FileRecord(
            id=row.id,
            path=_join(self.dirs.path_of(row.parent), row.name),
            content=row.content or b"",
            mode=row.mode,
            modified=as_utc(row.modified),
        )

    def get_id(self, ident: Union[PathIdentifier, int, str]) -> Optional[int]:
        """Row id for *ident*, or None when no such file exists."""
        ident = as_path_identifier(ident)
        if isinstance(ident, ById):
            return ident.id if self._id_exists(ident.id) else None

        parents, name = split_path(ident.path)
        if name is None:
            return None
        parent = None
        if parents:
            parent = self.dirs.paths.resolve(parents)
            if parent is None:
                return None
        return (
            self.db.query(File.id)
            .filter(File.name == name, parent_is(File.parent, parent))
            .scalar()
        )

    def exists(self, ident: Union[PathIdentifier, int, str]) -> bool:
        return self.get_id(ident) is not None

    def fetch_optional(self, ident: Union[PathIdentifier, int, str]) -> Optional[FileRecord]:
        file_id = self.get_id(ident)
        if file_id is None:
            return None
        row = self._fetch_one(
            self.db.query(
                File.id, File.name, File.parent, File.content, File.mode, File.modified
            ).filter(File.id == file_id)
        )
        return self._to_record(row) if row is not None else None

    def fetch(self, ident: Union[PathIdentifier, int, str]) -> FileRecord:
        """Load a file with its content. Raises NotFoundError when absent."""
        ident = as_path_identifier(ident)
        record = self.fetch_optional(ident)
        if record is None:
            raise NotFoundError(self.resource_name, describe(ident))
        return record

    def path_of(self, file_id: int) -> str:
        """Full path of a file, without loading its content."""
        row = self._fetch_one(
            self.db.query(File.name, File.parent).filter(File.id == file_id)
        )
        if row is None:
            raise NotFoundError(self.resource_name, f"id={file_id}")
        return _join(self.dirs.path_of(row.parent), row.name)

    def _placement(self, path: str) -> Tuple[Optional[int], str]:
        """(parent directory id, file name) for *path*, creating the parent chain."""
        parents, name = split_path(path)
        if name is None:
            raise BadRequestError(
                "Unable to get file name from path", details={"path": path}
            )
        check_name(name)
        parent = self.dirs.create("/".join(parents)) if parents else None
        return parent, name

    def create(self, new_file: NewFile) -> int:
        """Insert a file, creating its parent directories as needed."""
        parent, name = self._placement(new_file.path)
        row = File(
            name=name,
            parent=parent,
            content=new_file.content,
            mode=new_file.mode,
            modified=as_utc(new_file.modified),
        )
        try:
            with self.db.begin_nested():
                self.db.add(row)
        except IntegrityError:
            raise BadRequestError(
                f"File already exists: {new_file.path}", details={"path": new_file.path}
            )
        logger.debug("Created file", extra={"file_id": row.id, "path": new_file.path})
        return row.id

    def update(self, record: FileRecord) -> None:
        """Overwrite the file with ``record.id``. May move it to a new path."""
        parent, name = self._placement(record.path)
        statement = (
            update(File)
            .where(File.id == record.id)
            .values(
                name=name,
                parent=parent,
                content=record.content,
                mode=record.mode,
                modified=as_utc(record.modified),
            )
        )
        try:
            with self.db.begin_nested():
                count = self._execute(statement)
        except IntegrityError:
            raise BadRequestError(
                f"File already exists: {record.path}", details={"path": record.path}
            )
        if count == 0:
            raise NotFoundError(self.resource_name, f"id={record.id}")

    def delete(self, ident: Union[PathIdentifier, int, str]) -> int:
        """Delete the file row. Boilerplate references are the caller's check."""
        file_id = self.get_id(ident)
        if file_id is None:
            return 0
        return self._execute(delete(File).where(File.id == file_id))

"""Repository for boilerplates and their file mappings."""

import logging
from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError

from ..core.timestamps import as_utc, utc_now
from ..exceptions import BadRequestError, NotFoundError
from ..models.boilerplate import Boilerplate, BoilerplateFileMapping
from ..models.file import File
from ..schemas.boilerplate import BoilerplateRecord, NewBoilerplate
from .base import BaseRepository
from .directory_repository import DirectoryRepository
from .file_repository import FileRepository
from .identifiers import ById, NameIdentifier, PathIdentifier, as_name_identifier, describe

logger = logging.getLogger(__name__)


class BoilerplateRepository(BaseRepository[Boilerplate]):
    """Data access layer for boilerplates.

    A boilerplate's mapping set is always replaced as a whole. Create and
    update run inside one savepoint, so a mapping that points at a missing
    file leaves the previous state untouched.
    """

    model_class = Boilerplate
    resource_name = "Boilerplate"

    def __init__(self, db):
        super().__init__(db)
        self.files = FileRepository(db)
        self.dirs = DirectoryRepository(db)

    def get_id(self, ident: Union[NameIdentifier, int, str]) -> Optional[int]:
        ident = as_name_identifier(ident)
        if isinstance(ident, ById):
            return ident.id if self._id_exists(ident.id) else None
        return (
            self.db.query(Boilerplate.id)
            .filter(Boilerplate.name == ident.name)
            .scalar()
        )

    def exists(self, ident: Union[NameIdentifier, int, str]) -> bool:
        return self.get_id(ident) is not None

    def all_names(self) -> List[str]:
        return [row.name for row in self.db.query(Boilerplate.name).order_by(Boilerplate.name)]

    def fetch_optional(self, ident: Union[NameIdentifier, int, str]) -> Optional[BoilerplateRecord]:
        bp_id = self.get_id(ident)
        if bp_id is None:
            return None
        row = self._fetch_one(
            self.db.query(
                Boilerplate.id, Boilerplate.name, Boilerplate.modified, Boilerplate.script
            ).filter(Boilerplate.id == bp_id)
        )
        if row is None:
            return None
        mappings = (
            self.db.query(BoilerplateFileMapping.location, BoilerplateFileMapping.file_id)
            .filter(BoilerplateFileMapping.boilerplate_id == bp_id)
            .order_by(BoilerplateFileMapping.location)
            .all()
        )
        return BoilerplateRecord(
            id=row.id,
            name=row.name,
            modified=as_utc(row.modified),
            script=row.script,
            files={m.location: m.file_id for m in mappings},
        )

    def fetch(self, ident: Union[NameIdentifier, int, str]) -> BoilerplateRecord:
        ident = as_name_identifier(ident)
        record = self.fetch_optional(ident)
        if record is None:
            raise NotFoundError(self.resource_name, describe(ident))
        return record

    def create(self, new: NewBoilerplate, modified: Optional[datetime] = None) -> int:
        """Insert a boilerplate together with its mapping set."""
        row = Boilerplate(
            name=new.name,
            modified=as_utc(modified or utc_now()),
            script=new.script,
        )
        try:
            with self.db.begin_nested():
                self.db.add(row)
                self.db.flush()
                self._replace_mappings(row.id, new)
        except IntegrityError:
            raise BadRequestError(
                f"Boilerplate already exists: {new.name}", details={"name": new.name}
            )
        logger.info("Created boilerplate", extra={"boilerplate": new.name, "files": len(new.files)})
        return row.id

    def update(self, bp_id: int, new: NewBoilerplate, modified: Optional[datetime] = None) -> None:
        """Overwrite name, script and the whole mapping set of ``bp_id``."""
        statement = (
            update(Boilerplate)
            .where(Boilerplate.id == bp_id)
            .values(
                name=new.name,
                modified=as_utc(modified or utc_now()),
                script=new.script,
            )
        )
        try:
            with self.db.begin_nested():
                if self._execute(statement) == 0:
                    raise NotFoundError(self.resource_name, f"id={bp_id}")
                self._execute(
                    delete(BoilerplateFileMapping)
                    .where(BoilerplateFileMapping.boilerplate_id == bp_id)
                )
                self._replace_mappings(bp_id, new)
        except IntegrityError:
            raise BadRequestError(
                f"Boilerplate already exists: {new.name}", details={"name": new.name}
            )
        logger.info("Updated boilerplate", extra={"boilerplate": new.name, "files": len(new.files)})

    def _replace_mappings(self, bp_id: int, new: NewBoilerplate) -> None:
        """Insert one mapping per client location.

        Raises BadRequestError on the first server path that names no file,
        which rolls back the enclosing savepoint.
        """
        for location in sorted(new.files):
            server_path = new.files[location]
            file_id = self.files.get_id(server_path)
            if file_id is None:
                raise BadRequestError(
                    f"Boilerplate references non-existing file: {server_path}",
                    details={"missing_file": server_path, "location": location},
                )
            self.db.add(
                BoilerplateFileMapping(boilerplate_id=bp_id, location=location, file_id=file_id)
            )
        self.db.flush()

    def delete(self, ident: Union[NameIdentifier, int, str]) -> int:
        """Delete the boilerplate and its mappings."""
        bp_id = self.get_id(ident)
        if bp_id is None:
            return 0
        self._execute(
            delete(BoilerplateFileMapping).where(BoilerplateFileMapping.boilerplate_id == bp_id)
        )
        return self._execute(delete(Boilerplate).where(Boilerplate.id == bp_id))

    def files_used_in(self, file_id: int) -> List[str]:
        """Names of the boilerplates that map *file_id*, sorted."""
        rows = (
            self.db.query(Boilerplate.name)
            .join(BoilerplateFileMapping, BoilerplateFileMapping.boilerplate_id == Boilerplate.id)
            .filter(BoilerplateFileMapping.file_id == file_id)
            .distinct()
            .order_by(Boilerplate.name)
        )
        return [row.name for row in rows]

    def dir_used_in(self, ident: Union[PathIdentifier, int, str]) -> List[str]:
        """Names of the boilerplates that map any file below the directory."""
        dir_id = self.dirs.get_id(ident)
        if dir_id is None:
            return []
        rows = (
            self.db.query(Boilerplate.name)
            .join(BoilerplateFileMapping, BoilerplateFileMapping.boilerplate_id == Boilerplate.id)
            .join(File, File.id == BoilerplateFileMapping.file_id)
            .filter(File.parent.in_(self.dirs.descendant_ids(dir_id)))
            .distinct()
            .order_by(Boilerplate.name)
        )
        return [row.name for row in rows]

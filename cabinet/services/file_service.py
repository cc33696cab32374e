"""File operations: conditional read, upsert and guarded delete."""

import hashlib
import logging
from typing import Tuple

from sqlalchemy.orm import Session

from ..core.config import Settings
from ..database import begin_serializable
from ..exceptions import BadRequestError
from ..repositories import BoilerplateRepository, ById, ByPath, FileRepository
from ..schemas.file import FileRecord, NewFile
from .conditional import (
    Preconditions,
    Validators,
    check_read,
    check_write,
    file_validators,
    http_now,
)

logger = logging.getLogger(__name__)


class FileService:
    """Files addressed by path.

    Every write runs as one unit: read the current validators, evaluate the
    request preconditions, mutate, commit.
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.files = FileRepository(db)
        self.boilerplates = BoilerplateRepository(db)

    def get(self, path: str, pre: Preconditions) -> Tuple[FileRecord, Validators]:
        """Load a file for GET/HEAD. Raises NotModifiedError when the client copy is current."""
        record = self.files.fetch(ByPath(path))
        validators = file_validators(record)
        check_read(pre, validators)
        return record, validators

    def put(self, path: str, content: bytes, pre: Preconditions) -> Tuple[bool, Validators]:
        """Create or replace the file at *path*.

        Returns (created, validators of the stored content). Preconditions are
        only evaluated against a file that already exists.
        """
        begin_serializable(self.db)
        existing = self.files.fetch_optional(ByPath(path))
        now = http_now()

        if existing is not None:
            check_write(pre, file_validators(existing))
            self.files.update(
                FileRecord(
                    id=existing.id,
                    path=existing.path,
                    content=content,
                    mode=existing.mode,
                    modified=now,
                )
            )
            created = False
        else:
            self.files.create(
                NewFile(
                    path=path,
                    content=content,
                    mode=self.settings.default_file_mode,
                    modified=now,
                )
            )
            created = True

        self.db.commit()
        logger.info(
            "Stored file",
            extra={"path": path, "is_new": created, "size": len(content)},
        )
        return created, Validators(etag=hashlib.sha1(content).hexdigest(), last_modified=now)

    def delete(self, path: str, pre: Preconditions) -> None:
        """Delete a file that no boilerplate references."""
        begin_serializable(self.db)
        record = self.files.fetch(ByPath(path))
        check_write(pre, file_validators(record))

        used_in = self.boilerplates.files_used_in(record.id)
        if used_in:
            raise BadRequestError(
                f"file is used in boilerplates: {', '.join(used_in)}",
                details={"boilerplates": used_in},
            )

        self.files.delete(ById(record.id))
        self.db.commit()
        logger.info("Deleted file", extra={"path": record.path})

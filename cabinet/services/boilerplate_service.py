"""Boilerplate operations.

A boilerplate is exchanged with clients as a JSON object mapping client
location to server file path. Internally it maps to file ids, so server
paths are resolved on write and rebuilt on read.
"""

import hashlib
import json
import logging
from typing import List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from ..database import begin_serializable
from ..exceptions import BadRequestError
from ..repositories import BoilerplateRepository, ById, ByName, FileRepository
from ..schemas.boilerplate import BoilerplateRecord, FileMap, NewBoilerplate
from .conditional import Preconditions, Validators, check_read, check_write, http_now

logger = logging.getLogger(__name__)

_FILE_MAP = TypeAdapter(FileMap)


def boilerplate_etag(files: FileMap, script: Optional[str]) -> str:
    """SHA-1 over the canonical JSON form of the file map and script."""
    canonical = json.dumps(
        {"files": files, "script": script},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha1(canonical.encode("utf-8")).hexdigest()


def parse_file_map(body: bytes) -> FileMap:
    """Decode a request body into a client-location -> server-path map."""
    try:
        return _FILE_MAP.validate_json(body or b"{}")
    except ValidationError as e:
        error = e.errors()[0]
        raise BadRequestError(
            "Boilerplate must be a JSON object of strings",
            details={"error": error["msg"], "location": [str(part) for part in error["loc"]]},
        )


class BoilerplateService:
    """Boilerplates addressed by name."""

    def __init__(self, db: Session):
        self.db = db
        self.boilerplates = BoilerplateRepository(db)
        self.files = FileRepository(db)

    def list_names(self) -> List[str]:
        return self.boilerplates.all_names()

    def _server_paths(self, record: BoilerplateRecord) -> FileMap:
        return {
            location: self.files.path_of(file_id)
            for location, file_id in record.files.items()
        }

    def _validators(self, record: BoilerplateRecord, files: FileMap) -> Validators:
        return Validators(
            etag=boilerplate_etag(files, record.script),
            last_modified=record.modified,
        )

    def get(self, name: str, pre: Preconditions) -> Tuple[FileMap, Validators]:
        """File map of a boilerplate, with server paths. Honours GET preconditions."""
        record = self.boilerplates.fetch(ByName(name))
        files = self._server_paths(record)
        validators = self._validators(record, files)
        check_read(pre, validators)
        return files, validators

    def put(
        self,
        name: str,
        body: bytes,
        pre: Preconditions,
        script: Optional[str] = None,
    ) -> Tuple[bool, Validators]:
        """Create or replace a boilerplate. Returns (created, new validators)."""
        files = parse_file_map(body)
        try:
            new = NewBoilerplate(name=name, script=script, files=files)
        except ValidationError as e:
            raise BadRequestError(e.errors()[0]["msg"], details={"name": name})

        begin_serializable(self.db)
        existing = self.boilerplates.fetch_optional(ByName(name))
        now = http_now()
        if existing is not None:
            check_write(pre, self._validators(existing, self._server_paths(existing)))
            self.boilerplates.update(existing.id, new, modified=now)
            created = False
        else:
            self.boilerplates.create(new, modified=now)
            created = True
        self.db.commit()

        stored = self.boilerplates.fetch(ByName(name))
        return created, self._validators(stored, self._server_paths(stored))

    def delete(self, name: str, pre: Preconditions) -> None:
        begin_serializable(self.db)
        record = self.boilerplates.fetch(ByName(name))
        check_write(pre, self._validators(record, self._server_paths(record)))
        self.boilerplates.delete(ById(record.id))
        self.db.commit()
        logger.info("Deleted boilerplate", extra={"boilerplate": name})

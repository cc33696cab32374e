"""File schemas."""

import hashlib
import mimetypes
from datetime import datetime

from pydantic import BaseModel

DEFAULT_CONTENT_TYPE = "text/plain"


class NewFile(BaseModel):
    """Incoming file data, before it has a database id."""
    path: str
    content: bytes
    mode: int = 0
    modified: datetime


class FileRecord(NewFile):
    """A stored file. ``path`` is derived from the parent chain on read."""
    id: int

    def content_hash(self) -> str:
        """SHA-1 of the raw content, hex encoded. Computed on every call."""
        return hashlib.sha1(self.content).hexdigest()

    def content_type(self) -> str:
        """MIME type guessed from the file extension, text/plain when unknown."""
        guessed, _ = mimetypes.guess_type(self.path, strict=False)
        return guessed or DEFAULT_CONTENT_TYPE

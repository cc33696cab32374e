"""Pydantic schemas for stored records and API payloads."""

from .directory import DirectoryRecord, DirectoryEntry, FileEntry, Entry
from .file import NewFile, FileRecord
from .boilerplate import NewBoilerplate, BoilerplateRecord, FileMap
from .status import StatusResponse

__all__ = [
    "DirectoryRecord",
    "DirectoryEntry",
    "FileEntry",
    "Entry",
    "NewFile",
    "FileRecord",
    "NewBoilerplate",
    "BoilerplateRecord",
    "FileMap",
    "StatusResponse",
]

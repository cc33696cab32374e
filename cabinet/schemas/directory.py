"""Directory schemas."""

from typing import Optional, Union

from pydantic import BaseModel


class DirectoryRecord(BaseModel):
    """A directory row as returned by the directory repository."""
    id: int
    name: str
    parent: Optional[int] = None


class DirectoryEntry(BaseModel):
    """A subdirectory inside a listing. Renders as ``name/``."""
    id: int
    name: str

    def __str__(self) -> str:
        return f"{self.name}/"


class FileEntry(BaseModel):
    """A file inside a listing. Renders as its bare name."""
    id: int
    name: str

    def __str__(self) -> str:
        return self.name


Entry = Union[DirectoryEntry, FileEntry]

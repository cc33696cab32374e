"""Data access repositories."""

from .base import BaseRepository
from .identifiers import ById, ByName, ByPath
from .path_resolver import PathResolver
from .directory_repository import DirectoryRepository
from .file_repository import FileRepository
from .boilerplate_repository import BoilerplateRepository

__all__ = [
    "BaseRepository",
    "ById",
    "ByName",
    "ByPath",
    "PathResolver",
    "DirectoryRepository",
    "FileRepository",
    "BoilerplateRepository",
]

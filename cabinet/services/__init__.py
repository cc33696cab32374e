"""Business logic services."""

from .file_service import FileService
from .directory_service import DirectoryService
from .boilerplate_service import BoilerplateService

__all__ = ["FileService", "DirectoryService", "BoilerplateService"]

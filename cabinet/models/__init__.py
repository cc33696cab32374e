"""Database models."""

from .directory import Directory
from .file import File
from .boilerplate import Boilerplate, BoilerplateFileMapping

__all__ = ["Directory", "File", "Boilerplate", "BoilerplateFileMapping"]

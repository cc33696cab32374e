"""API routes."""

from .files import router as files_router
from .dirs import router as dirs_router
from .boilerplates import router as boilerplates_router
from .status import router as status_router

__all__ = [
    "files_router",
    "dirs_router",
    "boilerplates_router",
    "status_router",
]

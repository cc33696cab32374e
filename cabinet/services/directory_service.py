"""Directory operations: listing, explicit creation and guarded delete."""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..database import begin_serializable
from ..exceptions import BadRequestError, NotFoundError
from ..repositories import BoilerplateRepository, ById, ByPath, DirectoryRepository, FileRepository
from ..repositories.path_resolver import is_root

logger = logging.getLogger(__name__)


class DirectoryService:
    """Directories addressed by path. The root is the empty path."""

    def __init__(self, db: Session):
        self.db = db
        self.dirs = DirectoryRepository(db)
        self.files = FileRepository(db)
        self.boilerplates = BoilerplateRepository(db)

    def list_names(self, path: str) -> List[str]:
        """Entry names below *path*, directories first and suffixed with ``/``."""
        if not is_root(path) and not self.dirs.exists(ByPath(path)):
            if self.files.exists(ByPath(path)):
                raise BadRequestError(f"not a directory: {path}", details={"path": path})
            raise NotFoundError(self.dirs.resource_name, path)
        return [str(entry) for entry in self.dirs.content(ByPath(path))]

    def put(self, path: str) -> bool:
        """Create the directory and its ancestors. Returns True if anything was created."""
        if is_root(path):
            return False
        begin_serializable(self.db)
        if self.dirs.exists(ByPath(path)):
            return False
        self.dirs.create(path)
        self.db.commit()
        logger.info("Created directory", extra={"path": path})
        return True

    def delete(self, path: str) -> None:
        """Delete an empty directory no boilerplate depends on."""
        if is_root(path):
            raise BadRequestError("cannot delete the root directory")
        begin_serializable(self.db)

        dir_id = self.dirs.get_id(ByPath(path))
        if dir_id is None:
            if self.files.exists(ByPath(path)):
                raise BadRequestError(f"not a directory: {path}", details={"path": path})
            raise NotFoundError(self.dirs.resource_name, path)

        used_in = self.boilerplates.dir_used_in(ById(dir_id))
        if used_in:
            raise BadRequestError(
                f"directory is used in boilerplates: {', '.join(used_in)}",
                details={"boilerplates": used_in},
            )
        if self.dirs.content(ById(dir_id)):
            raise BadRequestError("directory not empty", details={"path": path})

        self.dirs.delete(ById(dir_id))
        self.db.commit()
        logger.info("Deleted directory", extra={"path": path})

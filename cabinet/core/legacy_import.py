"""Import a legacy on-disk layout into the database.

The legacy layout is two trees under one root:

    files/<path>           regular files; empty subdirectories are kept
    boilerplates/<name>    JSON object mapping client path -> server path

Entries that already exist are skipped, so replaying an import is safe.
A boilerplate that points at a missing file is logged, counted as failed
and the import carries on.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from sqlalchemy.orm import Session

from ..exceptions import CabinetException
from ..repositories import BoilerplateRepository, ByName, ByPath, DirectoryRepository, FileRepository
from ..schemas.boilerplate import NewBoilerplate
from ..schemas.file import NewFile
from .timestamps import from_timestamp

logger = logging.getLogger(__name__)

FILES_DIR = "files"
BOILERPLATES_DIR = "boilerplates"


@dataclass
class ImportResult:
    """Counts of what an import run did."""
    created: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"created={self.created} skipped={self.skipped} failed={self.failed}"


def import_legacy_layout(db: Session, root: Union[str, Path]) -> ImportResult:
    """Replay ``root/files`` and ``root/boilerplates`` into the database.

    Files go first so that boilerplates can resolve their server paths.

    Args:
        db: An open SQLAlchemy session. Committed once at the end.
        root: Directory holding the legacy trees.

    Returns:
        ImportResult with created/skipped/failed counts.
    """
    root = Path(root)
    result = ImportResult()
    if not root.is_dir():
        logger.warning("Legacy root is not a directory: %s", root)
        return result

    files_root = root / FILES_DIR
    if files_root.is_dir():
        _import_files(db, files_root, result)

    bp_root = root / BOILERPLATES_DIR
    if bp_root.is_dir():
        _import_boilerplates(db, bp_root, result)

    db.commit()
    logger.info("Legacy import finished: %s", result, extra={"legacy_root": str(root)})
    return result


def _import_files(db: Session, files_root: Path, result: ImportResult) -> None:
    dirs = DirectoryRepository(db)
    files = FileRepository(db)

    for entry in sorted(files_root.rglob("*")):
        rel = entry.relative_to(files_root).as_posix()

        if entry.is_dir():
            # Only empty directories need their own row; others appear via their files.
            if any(entry.iterdir()):
                continue
            if dirs.exists(ByPath(rel)):
                result.skipped += 1
                continue
            dirs.create(rel)
            result.created += 1
            continue

        if not entry.is_file():
            continue
        if files.exists(ByPath(rel)):
            result.skipped += 1
            continue

        try:
            stat = entry.stat()
            files.create(
                NewFile(
                    path=rel,
                    content=entry.read_bytes(),
                    mode=stat.st_mode & 0o777,
                    modified=from_timestamp(stat.st_mtime),
                )
            )
        except (OSError, CabinetException) as e:
            logger.warning("Failed to import file '%s': %s", rel, e)
            result.failed += 1
            result.errors.append(f"{rel}: {e}")
            continue
        result.created += 1


def _import_boilerplates(db: Session, bp_root: Path, result: ImportResult) -> None:
    boilerplates = BoilerplateRepository(db)

    for entry in sorted(bp_root.iterdir()):
        if not entry.is_file():
            continue
        name = entry.name
        if boilerplates.exists(ByName(name)):
            result.skipped += 1
            continue

        try:
            files = json.loads(entry.read_text(encoding="utf-8"))
            boilerplates.create(
                NewBoilerplate(name=name, files=files),
                modified=from_timestamp(entry.stat().st_mtime),
            )
        except (OSError, ValueError, CabinetException) as e:
            # pydantic's ValidationError and JSONDecodeError are both ValueErrors.
            logger.warning("Failed to import boilerplate '%s': %s", name, e)
            result.failed += 1
            result.errors.append(f"{name}: {e}")
            continue
        result.created += 1

"""Directory API: list, create and delete directories by path."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette.responses import Response

from ..database import get_db
from ..services.directory_service import DirectoryService

router = APIRouter(prefix="/dirs", tags=["directories"])


@router.get("/{dir_path:path}", response_model=List[str])
def list_directory(dir_path: str, db: Session = Depends(get_db)):
    """Entry names, directories first with a trailing ``/``. Empty path is the root."""
    return DirectoryService(db).list_names(dir_path)


@router.put("/{dir_path:path}")
def create_directory(dir_path: str, db: Session = Depends(get_db)):
    """Create a directory and its ancestors. 201 if created, 204 if it existed."""
    created = DirectoryService(db).put(dir_path)
    return Response(status_code=201 if created else 204)


@router.delete("/{dir_path:path}", status_code=204)
def delete_directory(dir_path: str, db: Session = Depends(get_db)):
    DirectoryService(db).delete(dir_path)
    return Response(status_code=204)

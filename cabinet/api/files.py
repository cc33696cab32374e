"""File API: conditional read, upsert and delete of file content by path."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.responses import Response

from ..core.config import Settings, get_settings
from ..database import get_db
from ..services.conditional import Preconditions
from ..services.file_service import FileService
from .payload import read_bounded_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


@router.api_route("/{file_path:path}", methods=["GET", "HEAD"])
def get_file(
    file_path: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Return the file content with ETag and Last-Modified. HEAD sends headers only."""
    service = FileService(db, settings)
    record, validators = service.get(file_path, Preconditions.from_headers(request.headers))

    headers = validators.headers()
    if request.method == "HEAD":
        headers["Content-Length"] = str(len(record.content))
        return Response(headers=headers, media_type=record.content_type())
    return Response(content=record.content, headers=headers, media_type=record.content_type())


@router.put("/{file_path:path}")
def put_file(
    file_path: str,
    request: Request,
    body: bytes = Depends(read_bounded_body),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Create (201) or replace (204) the file at the given path."""
    service = FileService(db, settings)
    created, validators = service.put(
        file_path, body, Preconditions.from_headers(request.headers)
    )
    return Response(status_code=201 if created else 204, headers=validators.headers())


@router.delete("/{file_path:path}", status_code=204)
def delete_file(
    file_path: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Delete a file. Refused while any boilerplate maps it."""
    FileService(db, settings).delete(file_path, Preconditions.from_headers(request.headers))
    return Response(status_code=204)

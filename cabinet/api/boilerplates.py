"""Boilerplate API: named sets of client-location -> server-file mappings."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.responses import Response

from ..database import get_db
from ..services.boilerplate_service import BoilerplateService
from ..services.conditional import Preconditions
from .payload import read_bounded_body

router = APIRouter(prefix="/boilerplates", tags=["boilerplates"])


@router.get("", response_model=List[str])
def list_boilerplates(db: Session = Depends(get_db)):
    """All boilerplate names, sorted."""
    return BoilerplateService(db).list_names()


@router.get("/{name:path}", response_model=Dict[str, str])
def get_boilerplate(name: str, request: Request, db: Session = Depends(get_db)):
    """File map of one boilerplate: client location -> server file path."""
    files, validators = BoilerplateService(db).get(
        name, Preconditions.from_headers(request.headers)
    )
    return JSONResponse(content=files, headers=validators.headers())


@router.put("/{name:path}")
def put_boilerplate(
    name: str,
    request: Request,
    script: Optional[str] = Query(None, description="Provisioning script run after the files are placed"),
    body: bytes = Depends(read_bounded_body),
    db: Session = Depends(get_db),
):
    """Create (201) or replace (204) a boilerplate from a JSON file map."""
    created, validators = BoilerplateService(db).put(
        name, body, Preconditions.from_headers(request.headers), script=script
    )
    return Response(status_code=201 if created else 204, headers=validators.headers())


@router.delete("/{name:path}", status_code=204)
def delete_boilerplate(name: str, request: Request, db: Session = Depends(get_db)):
    BoilerplateService(db).delete(name, Preconditions.from_headers(request.headers))
    return Response(status_code=204)

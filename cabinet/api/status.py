"""Status API: row counts per resource kind."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories import BoilerplateRepository, DirectoryRepository, FileRepository
from ..schemas.status import StatusResponse

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
def get_status(db: Session = Depends(get_db)):
    return StatusResponse(
        files=FileRepository(db).count(),
        directories=DirectoryRepository(db).count(),
        boilerplates=BoilerplateRepository(db).count(),
    )

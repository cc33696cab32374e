"""Status schema."""

from pydantic import BaseModel


class StatusResponse(BaseModel):
    """Row counts per resource kind."""
    files: int
    directories: int
    boilerplates: int

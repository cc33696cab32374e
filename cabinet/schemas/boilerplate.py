"""Boilerplate schemas."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, field_validator

# Client-side location -> server-side file path
FileMap = Dict[str, str]

MAX_NAME_LENGTH = 255


class NewBoilerplate(BaseModel):
    """Incoming boilerplate: name, optional script and the client->server file map."""
    name: str
    script: Optional[str] = None
    files: FileMap = {}

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        # The name is the URL key, so it is stored exactly as given.
        if not v.strip():
            raise ValueError("Boilerplate name cannot be empty")
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Boilerplate name longer than {MAX_NAME_LENGTH} characters")
        return v


class BoilerplateRecord(BaseModel):
    """A stored boilerplate. ``files`` maps client location -> server file id."""
    id: int
    name: str
    modified: datetime
    script: Optional[str] = None
    files: Dict[str, int] = {}

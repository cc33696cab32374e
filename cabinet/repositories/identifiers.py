"""Ways of addressing a stored entity.

Every repository operation accepts either variant (or a bare ``int`` /
``str``, coerced here) and resolves it to a row id before touching the
table.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ById:
    id: int


@dataclass(frozen=True)
class ByPath:
    path: str


@dataclass(frozen=True)
class ByName:
    name: str


PathIdentifier = Union[ById, ByPath]
NameIdentifier = Union[ById, ByName]


def as_path_identifier(ident: Union[PathIdentifier, int, str]) -> PathIdentifier:
    """Coerce ``int`` to ById and ``str`` to ByPath."""
    if isinstance(ident, (ById, ByPath)):
        return ident
    if isinstance(ident, int) and not isinstance(ident, bool):
        return ById(ident)
    if isinstance(ident, str):
        return ByPath(ident)
    raise TypeError(f"Cannot address a directory or file with {ident!r}")


def as_name_identifier(ident: Union[NameIdentifier, int, str]) -> NameIdentifier:
    """Coerce ``int`` to ById and ``str`` to ByName."""
    if isinstance(ident, (ById, ByName)):
        return ident
    if isinstance(ident, int) and not isinstance(ident, bool):
        return ById(ident)
    if isinstance(ident, str):
        return ByName(ident)
    raise TypeError(f"Cannot address a boilerplate with {ident!r}")


def describe(ident: Union[PathIdentifier, NameIdentifier]) -> str:
    """Human-readable form for error messages."""
    if isinstance(ident, ById):
        return f"id={ident.id}"
    if isinstance(ident, ByPath):
        return ident.path
    return ident.name

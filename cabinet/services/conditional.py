"""Conditional request evaluation (RFC 7232 subset).

One decision procedure serves GET/HEAD, PUT and DELETE on files and
boilerplates. The evaluate_* functions are pure; check_* wrap them and
raise the matching CabinetException.

Preconditions only apply to a resource that currently exists. Callers skip
the check when the target is absent and fall through to 404 or creation.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Mapping, Optional

from ..core.timestamps import as_utc, format_http_date, parse_http_date, utc_now
from ..exceptions import NotModifiedError, PreconditionFailedError
from ..schemas.file import FileRecord

__all__ = [
    "Validators",
    "Preconditions",
    "Outcome",
    "evaluate_read",
    "evaluate_write",
    "check_read",
    "check_write",
    "file_validators",
    "format_http_date",
    "parse_http_date",
    "http_now",
]

http_now = utc_now

ANY_ETAG = "*"


@dataclass(frozen=True)
class Validators:
    """Current validators of a resource: strong ETag and Last-Modified."""

    etag: str
    last_modified: datetime

    def headers(self) -> Dict[str, str]:
        return {
            "ETag": f'"{self.etag}"',
            "Last-Modified": format_http_date(self.last_modified),
        }


def _header_values(headers: Mapping[str, str], name: str) -> List[str]:
    getlist = getattr(headers, "getlist", None)
    if getlist is not None:
        return list(getlist(name))
    value = headers.get(name)
    return [value] if value is not None else []


def _parse_etags(raw_values: List[str]) -> Optional[List[str]]:
    """Entity tags from every occurrence of a header, quotes stripped.

    None when the header is absent. A weak ``W/`` prefix is left in place so
    a weak tag never equals a strong one.
    """
    if not raw_values:
        return None
    tags = []
    for raw in raw_values:
        for part in raw.split(","):
            tag = part.strip().strip('"')
            if tag:
                tags.append(tag)
    return tags


def _parse_date(raw_values: List[str]) -> Optional[datetime]:
    if not raw_values:
        return None
    return parse_http_date(raw_values[0])


@dataclass(frozen=True)
class Preconditions:
    """The four conditional headers as parsed from a request."""

    if_match: Optional[List[str]] = None
    if_none_match: Optional[List[str]] = None
    if_modified_since: Optional[datetime] = None
    if_unmodified_since: Optional[datetime] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "Preconditions":
        return cls(
            if_match=_parse_etags(_header_values(headers, "if-match")),
            if_none_match=_parse_etags(_header_values(headers, "if-none-match")),
            if_modified_since=_parse_date(_header_values(headers, "if-modified-since")),
            if_unmodified_since=_parse_date(_header_values(headers, "if-unmodified-since")),
        )


class Outcome(str, Enum):
    PROCEED = "proceed"
    NOT_MODIFIED = "not_modified"
    PRECONDITION_FAILED = "precondition_failed"


def _etag_matches(tags: List[str], etag: str) -> bool:
    return ANY_ETAG in tags or etag in tags


def evaluate_read(pre: Preconditions, current: Validators) -> Outcome:
    """GET/HEAD: If-None-Match wins over If-Modified-Since."""
    if pre.if_none_match is not None:
        if _etag_matches(pre.if_none_match, current.etag):
            return Outcome.NOT_MODIFIED
        return Outcome.PROCEED
    if pre.if_modified_since is not None:
        if as_utc(current.last_modified) <= pre.if_modified_since:
            return Outcome.NOT_MODIFIED
    return Outcome.PROCEED


def evaluate_write(pre: Preconditions, current: Validators) -> Outcome:
    """PUT/DELETE: If-Match wins over If-Unmodified-Since."""
    if pre.if_match is not None:
        if not _etag_matches(pre.if_match, current.etag):
            return Outcome.PRECONDITION_FAILED
        return Outcome.PROCEED
    if pre.if_unmodified_since is not None:
        if as_utc(current.last_modified) > pre.if_unmodified_since:
            return Outcome.PRECONDITION_FAILED
    return Outcome.PROCEED


def check_read(pre: Preconditions, current: Validators) -> None:
    if evaluate_read(pre, current) is Outcome.NOT_MODIFIED:
        raise NotModifiedError(headers=current.headers())


def check_write(pre: Preconditions, current: Validators) -> None:
    if evaluate_write(pre, current) is Outcome.PRECONDITION_FAILED:
        raise PreconditionFailedError()


def file_validators(record: FileRecord) -> Validators:
    return Validators(etag=record.content_hash(), last_modified=record.modified)

"""Bounded request body reading."""

import logging

from fastapi import Depends, Request

from ..core.config import Settings, get_settings
from ..exceptions import BadRequestError, PayloadTooLargeError

logger = logging.getLogger(__name__)


async def read_bounded_body(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> bytes:
    """Read the request body, aborting as soon as it exceeds MAX_PAYLOAD_BYTES.

    A declared Content-Length above the ceiling is rejected before reading.
    Otherwise the stream is consumed chunk by chunk and never buffered past
    the limit.
    """
    limit = settings.max_payload_bytes

    declared = request.headers.get("content-length")
    if declared is not None:
        try:
            declared_size = int(declared)
        except ValueError:
            raise BadRequestError("Invalid Content-Length header")
        if declared_size > limit:
            logger.info(
                "Rejected oversized payload",
                extra={"path": request.url.path, "content_length": declared_size},
            )
            raise PayloadTooLargeError(limit)

    body = bytearray()
    async for chunk in request.stream():
        if len(body) + len(chunk) > limit:
            logger.info("Payload exceeded limit while reading", extra={"path": request.url.path})
            raise PayloadTooLargeError(limit)
        body.extend(chunk)
    return bytes(body)

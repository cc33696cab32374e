"""Exception handlers for structured error responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from ..exceptions import CabinetException, InternalError, NotModifiedError

logger = logging.getLogger(__name__)


async def cabinet_exception_handler(request: Request, exc: CabinetException) -> Response:
    """
    Convert a CabinetException into its HTTP response.

    304 carries only the validator headers. 5xx causes are logged in full
    and replaced by a generic message. Everything else returns the
    exception's JSON form.

    Args:
        request: FastAPI request object
        exc: CabinetException instance

    Returns:
        Response with the mapped status code
    """
    if isinstance(exc, NotModifiedError):
        return Response(status_code=exc.status_code, headers=exc.headers)

    extra = {
        "error_code": exc.error_code.value,
        "path": request.url.path,
        "method": request.method,
        "details": exc.details,
        "status_code": exc.status_code,
    }
    if exc.status_code >= 500:
        logger.error(f"CabinetException: {exc.error_code.value}: {exc.message}", extra=extra)
    else:
        logger.info(f"CabinetException: {exc.error_code.value}", extra=extra)

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unexpected database failure: log the traceback, answer 500."""
    logger.error(
        "Database error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    error = InternalError("Database error", original_error=exc)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

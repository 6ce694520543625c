"""
Application-wide exception handlers.

Maps backend exceptions onto HTTP responses. Every failure body carries
an ``error`` field. Authentication failures are collapsed to a fixed
message and unexpected failures to a generic one; their details only
go to the log.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import EBuddyError

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "Internal Server Error"


def status_for(exc: EBuddyError) -> int:
    """HTTP status for a backend exception, fixed by its base class."""
    return exc.status_code


async def ebuddy_error_handler(request: Request, exc: EBuddyError) -> JSONResponse:
    """Render a backend exception with its mapped status code."""
    status_code = status_for(exc)
    headers = None
    if status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    elif status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.to_dict(),
        )

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.client_message},
        headers=headers,
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies as 400 with the first problem."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        reason = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        reason = "Invalid request"
    return JSONResponse(status_code=400, content={"error": f"Validation failed: {reason}"})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Final safety net: log the traceback, return a generic 500."""
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": INTERNAL_SERVER_ERROR})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EBuddyError, ebuddy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

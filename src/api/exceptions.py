from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
from uuid import uuid4

from src.core.errors import AppError, DomainError
from src.domains.search.errors import UpstreamError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your search request."


async def app_error_handler(request: Request, exc: AppError):
    """
    Map application errors to a ``{"message": ...}`` body.

    Domain errors are client faults (400). Configuration and infrastructure
    errors are server faults (500) and carry their own human-readable message.
    """
    if isinstance(exc, DomainError):
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        if isinstance(exc, UpstreamError):
            logger.error(f"Upstream failure (status={exc.status}): {exc}")
        else:
            logger.error(f"{type(exc).__name__}: {exc}")
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(status_code=status_code, content={"message": str(exc)})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or empty request bodies are client faults, not 422s."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        message = str(first.get("msg", message))
        # pydantic prefixes custom validator messages with "Value error, "
        message = message.removeprefix("Value error, ")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to catch unhandled exceptions and return a standard JSON response.
    Secure: Does not leak exception details to the client.
    """
    error_id = uuid4()
    logger.error(f"Unhandled exception {error_id}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": GENERIC_ERROR_MESSAGE,
            "error_id": str(error_id),
        },
    )

# File: src/parkmeter/core/exception_handlers.py
"""Global exception handlers: every failure becomes {"success": false, "error": ...}."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from parkmeter.core.errors import AppError, ErrorResponse
from parkmeter.core.logging import get_logger

logger = get_logger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Handle all AppError exceptions and convert to JSON response.

    Returns standardized error format:
    {
        "success": false,
        "error": "No active parking session found for this plate"
    }
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "app_error",
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
    )
    return _error_response(exc.status_code, exc.message)


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    message = str(error.get("msg", "Invalid request")).removeprefix("Value error, ")
    # loc holds the Python name for defaulted fields
    field = ".".join(
        to_camel(part) if isinstance(part, str) and "_" in part else str(part)
        for part in error.get("loc", ())
        if part not in ("body", "path", "query")
    )
    if field and not message.startswith(field):
        return f"{field}: {message}"
    return message


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Schema errors on body/path/query are client errors (400), not 422."""
    message = _first_error_message(exc)
    logger.info("request.invalid", path=request.url.path, error=message)
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and explicit HTTPExceptions."""
    logger.info(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, never send it to the client."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app) -> None:
    """Register all custom exception handlers with FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

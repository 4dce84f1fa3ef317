"""Exception handlers for the file manager API.

The file manager client expects every failure as ``{"error": message}``
with status 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import NeoFilesError

logger = logging.getLogger(__name__)


def error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """Register exception handlers for the application."""

    @app.exception_handler(NeoFilesError)
    async def neo_files_error_handler(request: Request, exc: NeoFilesError):
        logger.info(f"{request.method} {request.url.path}: {exc.error_code} {exc.message}")
        return error_response(exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return error_response(message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return error_response("An unexpected error occurred" if is_production else str(exc))

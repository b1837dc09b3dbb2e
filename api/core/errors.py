"""
Application error taxonomy and the FastAPI handlers that render it.

Every failure response has the same shape: {"error": "<message>"}.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """
    Request input is missing or ill-typed. FastAPI's RequestValidationError is
    converted to this before rendering.
    """

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class DatabaseError(AppError):
    """
    Storage-layer failure. The message is for operators only; clients always
    see INTERNAL_ERROR_MESSAGE.
    """


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_errors(exc: RequestValidationError) -> str:
    fields: list[str] = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            return "Request body is not valid JSON."
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return "Invalid or missing fields: " + ", ".join(fields)


async def _app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def _database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(
        "database_error method=%s path=%s detail=%s",
        request.method,
        request.url.path,
        exc.message,
        exc_info=exc,
    )
    return error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await _app_error_handler(request, ValidationError(_describe_validation_errors(exc)))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DatabaseError, _database_error_handler)
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

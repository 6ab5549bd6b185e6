import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from psycopg.errors import (
    CheckViolation,
    DataError,
    InvalidTextRepresentation,
    NotNullViolation,
    UniqueViolation,
)
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


def error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "code": code,
            "details": details or {},
        },
    )


def failure_response(*, status_code: int, error: str) -> JSONResponse:
    """Body shape of the catch-all handlers: ``{"success": false, "error": ...}``."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
    )


def describe_validation_issue(issue: dict[str, Any]) -> str:
    location = [str(part) for part in issue.get("loc", ()) if part not in ("body", "query", "path")]
    message = issue.get("msg", "Invalid value")
    if not location:
        return message
    return f"{'.'.join(location)}: {message}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info("%s %s failed with %s: %s", request.method, request.url.path, exc.code, exc.message)
    return error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = exc.errors()
    message = describe_validation_issue(issues[0]) if issues else "Request validation failed."
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)
    return error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        code="VALIDATION_FAILED",
        message=message,
        details={
            "issues": [
                {"loc": list(issue.get("loc", ())), "msg": issue.get("msg"), "type": issue.get("type")}
                for issue in issues
            ]
        },
    )


async def duplicate_key_handler(request: Request, exc: UniqueViolation) -> JSONResponse:
    logger.warning("Duplicate key on %s %s: %s", request.method, request.url.path, exc)
    return failure_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        error="Duplicate field value entered",
    )


async def constraint_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Constraint violated on %s %s: %s", request.method, request.url.path, exc)
    return failure_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        error="Validation failed",
    )


async def data_error_handler(request: Request, exc: DataError) -> JSONResponse:
    logger.warning("Rejected value on %s %s: %s", request.method, request.url.path, exc)
    return failure_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        error="Validation failed",
    )


async def cast_error_handler(request: Request, exc: InvalidTextRepresentation) -> JSONResponse:
    logger.warning("Cast error on %s %s: %s", request.method, request.url.path, exc)
    return failure_response(
        status_code=status.HTTP_404_NOT_FOUND,
        error="Resource not found",
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = f"Not Found - {request.url.path}"
    else:
        error = str(exc.detail)
    return failure_response(status_code=exc.status_code, error=error)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return failure_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error="Server Error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(UniqueViolation, duplicate_key_handler)
    app.add_exception_handler(CheckViolation, constraint_error_handler)
    app.add_exception_handler(NotNullViolation, constraint_error_handler)
    app.add_exception_handler(DataError, data_error_handler)
    app.add_exception_handler(InvalidTextRepresentation, cast_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

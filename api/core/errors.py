"""
Typed errors for the directory core.

Every error knows its HTTP status and how to render itself, so routers never
translate them by hand. `register_error_handlers` installs the handlers on
the FastAPI app.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Base class for all domain and infrastructure failures."""

    code = "DIRECTORY_ERROR"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def public_message(self) -> str:
        return self.message

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.public_message()}}


class ValidationError(DirectoryError):
    """Field-level, user-correctable submission problems."""

    code = "VALIDATION_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, field_errors: dict[str, str]):
        fields = ", ".join(sorted(field_errors))
        super().__init__(f"Invalid fields: {fields}")
        self.field_errors = dict(field_errors)

    def to_response(self) -> dict:
        body = super().to_response()
        body["fieldErrors"] = self.field_errors
        return body


class NotFound(DirectoryError):
    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, key: str):
        super().__init__(f"{resource} '{key}' not found.")
        self.resource = resource
        self.key = key


class Forbidden(DirectoryError):
    code = "FORBIDDEN"
    http_status = status.HTTP_403_FORBIDDEN


class InvalidTransition(DirectoryError):
    code = "INVALID_TRANSITION"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, entry_id: str, current: str, target: str):
        super().__init__(f"Entry '{entry_id}' cannot move from '{current}' to '{target}'.")
        self.entry_id = entry_id
        self.current = current
        self.target = target


class StoreError(DirectoryError):
    """
    Persistence or connectivity failure.

    The original driver message is kept on the exception (and logged) but
    never sent to clients.
    """

    code = "STORE_ERROR"
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE

    def public_message(self) -> str:
        return "The directory is temporarily unavailable. Please try again later."


class AssetError(DirectoryError):
    """A single uploaded file was rejected or failed to upload."""

    code = "ASSET_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST

    OVERSIZE = "oversize"
    WRONG_TYPE = "wrong_type"
    COUNT_EXCEEDED = "count_exceeded"
    EMPTY = "empty"
    NO_FILES = "no_files"
    UPLOAD_FAILED = "upload_failed"

    def __init__(self, filename: str, reason: str, message: str):
        super().__init__(message)
        self.filename = filename
        self.reason = reason

    def to_dict(self) -> dict:
        return {"filename": self.filename, "reason": self.reason, "message": self.message}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError):
        if isinstance(exc, StoreError):
            logger.error("store_error path=%s detail=%s", request.url.path, exc.message)
        else:
            logger.info("request_failed path=%s code=%s detail=%s", request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("request_invalid path=%s errors=%s", request.url.path, exc.errors())
        field_errors = {
            ".".join(str(loc) for loc in err["loc"] if loc != "body"): err["msg"]
            for err in exc.errors()
        }
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {"code": "VALIDATION_ERROR", "message": "Invalid request data."},
                "fieldErrors": field_errors,
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error path=%s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."}},
        )

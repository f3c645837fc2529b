import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class EarthLinkError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.detail:
            payload["message"] = self.detail
        return payload


class ValidationError(EarthLinkError):
    status_code = 400


class AuthError(EarthLinkError):
    status_code = 401


class ForbiddenError(EarthLinkError):
    status_code = 403


class NotFoundError(EarthLinkError):
    status_code = 404


class ConflictError(EarthLinkError):
    status_code = 409


class InternalError(EarthLinkError):
    status_code = 500


def _first_validation_problem(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    message = str(first.get("msg", "Invalid request."))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


def _internal_error_response(exc: Exception) -> JSONResponse:
    error = InternalError("Internal server error", str(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(EarthLinkError)
    async def earthlink_error_handler(request: Request, exc: EarthLinkError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        response = JSONResponse(status_code=exc.status_code, content=exc.to_payload())
        # A stale cookie seen while resolving the user is dropped on error responses too
        if getattr(request.state, "clear_session", False):
            from utils.route_helpers import clear_session_cookie
            clear_session_cookie(response)
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _first_validation_problem(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(sqlite3.Error)
    async def database_error_handler(request: Request, exc: sqlite3.Error):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return _internal_error_response(exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _internal_error_response(exc)

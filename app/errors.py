"""Domain exceptions and their HTTP translation.

Services raise these; the handlers registered in ``app.main`` turn them into
``{"message": ...}`` JSON bodies so routers never build error responses by hand.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class ModerationConflictError(AppError):
    """Raised for a status transition out of a terminal moderation state."""

    status_code = 409


class StoreError(AppError):
    status_code = 500


def first_validation_message(errors: list[dict]) -> str:
    """Message of the first pydantic error, without the 'Value error, ' prefix."""
    if not errors:
        return "Invalid request"
    err = errors[0]
    if err.get("type") == "value_error" and "ctx" in err and "error" in err["ctx"]:
        return str(err["ctx"]["error"])
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
    msg = err.get("msg", "Invalid request")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": GENERIC_ERROR_MESSAGE})
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": first_validation_message(exc.errors())})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

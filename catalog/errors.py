# catalog/errors.py
"""
Error types raised by the catalog and the handlers that turn them into
``{"error": <message>}`` JSON responses.

Route code raises one of the ``CatalogError`` subclasses; the handlers
registered by ``register_exception_handlers`` log the message and pick the
status code. Anything unexpected collapses to a generic 500 so internal
details never reach the client.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class CatalogError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    status_code = 404


class ValidationError(CatalogError):
    status_code = 400


class UnauthorizedError(CatalogError):
    status_code = 401


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    # loc looks like ("body", "price"), ("body", "price", "int") for a union
    # member, or ("body",) for a non-object body
    loc = tuple(first.get("loc", ()))
    if len(loc) < 2:
        return f"Invalid request body: {first.get('msg')}"
    field = str(loc[1])
    # union members report one error each; the last one is the widest type
    same_field = [e for e in errors if tuple(e.get("loc", ()))[:2] == loc[:2]]
    return f"Invalid value for '{field}': {same_field[-1].get('msg')}"


async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.error("Error: %s", exc.message)
    return _error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_error(exc)
    logger.error("Error: %s", message)
    return _error_response(ValidationError.status_code, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.error("Error: %s", exc.detail)
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Error: %s", exc)
    return _error_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

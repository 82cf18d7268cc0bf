"""
Application-level exception handlers.

Anything a route does not turn into an envelope itself ends up here, so no
request ever gets an unstructured error body.
"""

import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .dependencies import get_request_settings
from .v1.responses import validation_failed_response

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_STATUSES = {status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED}


def _original_url(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def format_validation_errors(exc: RequestValidationError) -> List[str]:
    """One message per offending field, e.g. "age: Input should be a valid integer" """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc)
    logger.info(f"Request validation failed for {request.method} {request.url.path}: {errors}")
    return validation_failed_response(errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in ROUTE_NOT_FOUND_STATUSES:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Route not found",
                "path": _original_url(request),
                "method": request.method,
            },
        )

    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        # Body could not be decoded (bad encoding, malformed multipart)
        return validation_failed_response([str(exc.detail)])

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)

    message = "Something went wrong" if get_request_settings(request).is_production else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": message,
        },
    )


def setup_error_handling(app: FastAPI) -> None:
    """Register all exception handlers on the application"""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

"""
JSON envelopes shared by the user endpoints.

Every response has the shape ``{message, data, ...}``; errors carry
``data: null`` plus optional detail keys.
"""
# Standard library imports
from typing import Any

# External package imports
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

# Local application imports
from ...domain.exceptions import (
    DuplicateEmailError,
    InvalidUserReferenceError,
    MissingRequiredFieldsError,
    NoFieldsToUpdateError,
    UserNotFoundError,
    UserServiceError,
    UserValidationError,
)


def envelope(status_code: int, message: str, data: Any = None, **extra: Any) -> JSONResponse:
    """Build a JSON envelope response; pydantic models are dumped by alias"""
    content = {"message": message, "data": data, **extra}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content, by_alias=True))


def validation_failed_response(errors: list) -> JSONResponse:
    return envelope(status.HTTP_400_BAD_REQUEST, "Validation failed", errors=list(errors))


def server_error_response(exception: Exception) -> JSONResponse:
    return envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Server error",
        serverMessage=str(exception),
    )


def error_response(exception: UserServiceError) -> JSONResponse:
    """Map a domain error to its status code and envelope"""
    if isinstance(exception, UserValidationError):
        return validation_failed_response(exception.errors)
    if isinstance(exception, MissingRequiredFieldsError):
        return envelope(status.HTTP_400_BAD_REQUEST, "Name and email are required")
    if isinstance(exception, InvalidUserReferenceError):
        return envelope(status.HTTP_400_BAD_REQUEST, "Invalid user ID format")
    if isinstance(exception, NoFieldsToUpdateError):
        return envelope(status.HTTP_400_BAD_REQUEST, "No fields to update")
    if isinstance(exception, DuplicateEmailError):
        return envelope(status.HTTP_409_CONFLICT, "Email already exists")
    if isinstance(exception, UserNotFoundError):
        return envelope(status.HTTP_404_NOT_FOUND, "User not found")
    return server_error_response(exception)

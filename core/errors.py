"""
core/errors.py -- Domain error taxonomy shared by every layer.

Each AppError carries the HTTP status and machine-readable code it maps to.
Services raise these; api/main.py turns them into the ErrorResponse envelope
at the request boundary. Nothing below the API layer knows about FastAPI.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that have a defined client-facing response."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    default_message = "Request validation failed."


class Conflict(AppError):
    # Duplicate registrations are reported as 400, same as other bad input.
    status_code = 400
    code = "already_exists"
    default_message = "Resource already exists."


class Unauthenticated(AppError):
    status_code = 401
    code = "unauthorized"
    default_message = "Authentication required."


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    default_message = "Access denied."


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found."


class InternalError(AppError):
    status_code = 500
    code = "internal_error"
    default_message = "An unexpected error occurred."

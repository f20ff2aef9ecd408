"""Exception hierarchy for the Car API.

Every error carries the HTTP status it is reported with; the application
turns them into ``{"message": ...}`` responses.
"""

from __future__ import annotations


class CarApiError(Exception):
    """Base exception for all Car API errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(CarApiError):
    """Request rejected, e.g. registering a username twice."""

    status_code = 400


class InvalidCredentialsError(CarApiError):
    """Unknown username or wrong password."""

    status_code = 400


class UnauthenticatedError(CarApiError):
    """No bearer token was supplied."""

    status_code = 401


class ForbiddenError(CarApiError):
    """Bearer token is malformed, badly signed or expired."""

    status_code = 403


class NotFoundError(CarApiError):
    status_code = 404


class PersistenceError(CarApiError):
    """The cars file could not be read or written."""

    status_code = 500

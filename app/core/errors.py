"""
Application error taxonomy.

Handlers in ``app.main`` render every ``AppError`` as
``{"message": ..., "code": <class name>}`` with the class status code.
``UnknownPermissionError`` is not an ``AppError``: it signals a
rule table that drifted from the permission catalog and surfaces as a 500.
"""
from typing import Dict, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return type(self).__name__


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(BadRequestError):
    """Malformed input, e.g. an unknown role or an empty user id."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationDenied(AppError):
    """The subject is well formed but not allowed to perform the action."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class UnknownPermissionError(LookupError):
    """An (action, resource) pair that the permission catalog does not know."""

from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or the session token expired."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ApiError(DomainError):
    """Raised when the REST backend answers with an error status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ApiError):
    """The backend has no record with the requested id."""


class BackendUnavailableError(ApiError):
    """The backend could not be reached (connection refused, timeout)."""

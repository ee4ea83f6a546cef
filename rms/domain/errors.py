"""
Domain errors.

All of them are expected, caller-recoverable conditions.  The API layer
turns them into ``{"detail": message}`` responses using ``status_code``.
"""

from typing import Optional


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """A field is outside its allowed length or range."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """An identifier is unknown to the caller."""

    status_code = 404


class ComputationError(DomainError):
    """Raised when a computation receives NaN / infinite input."""

    status_code = 422


class AuthenticationError(DomainError):
    status_code = 401

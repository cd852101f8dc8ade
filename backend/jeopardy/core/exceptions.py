"""
Domain errors raised by services and rendered by the API layer
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Malformed or out-of-range input"""
    status_code = 400


class AuthenticationError(AppError):
    """Missing or invalid credentials"""
    status_code = 401


class AuthorizationError(AppError):
    """Authenticated, but not allowed to touch the target resource"""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class AlreadyExistsError(ConflictError):
    """Duplicate join or duplicate named resource"""
    status_code = 400


class InvalidStateError(ConflictError):
    """Transition not allowed from the current state"""
    status_code = 409


class UpstreamError(AppError):
    """An external service (the LLM provider) failed or answered garbage"""
    status_code = 502

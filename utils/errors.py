"""
Error taxonomy shared by the API client, services and views.

- NetworkError: the request never got a response
- HttpStatusError: the backend answered with a non-success status
- ValidationError: a form failed client-side validation (no request made)
- InvalidTransition: the assessment wizard was asked to do something its
  current state does not allow
"""

from typing import Dict, Optional


class ApiError(Exception):
    """Base class for failures talking to the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(ApiError):
    """Transport failure: connection refused, DNS, timeout."""


class HttpStatusError(ApiError):
    """The backend returned a non-2xx status or a failed envelope."""


class NotFoundError(HttpStatusError):
    """The requested entity does not exist (HTTP 404)."""


class ValidationError(Exception):
    """Client-side validation failure, keyed by form field."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class InvalidTransition(Exception):
    """Raised when a wizard action is not legal in the current state."""


def describe_error(error: Exception) -> str:
    """
    Turn any exception into the message shown in an error panel.

    Args:
        error: Exception raised by a service or the API client

    Returns:
        Human readable message
    """
    if isinstance(error, ApiError) and error.message:
        return error.message
    if isinstance(error, ValidationError):
        return "Please fix the highlighted fields."
    if str(error):
        return str(error)
    return "An unexpected error occurred"

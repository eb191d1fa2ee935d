"""
Common Exception Classes

This module defines the error taxonomy shared by the services and the HTTP
layer. Every error carries the HTTP status code it maps to, so routers never
translate errors by hand.
"""

from typing import Optional


class InkwellError(Exception):
    """Base class for all Inkwell errors."""

    status_code: int = 500

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        """
        Initialize the error.

        Args:
            message: Message safe to show to the caller
            original_exception: Underlying exception, kept for logging only
        """
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class ValidationError(InkwellError):
    """Malformed or missing input."""

    status_code = 400

    def __init__(self, message: str = "Invalid input", errors: Optional[dict] = None):
        super().__init__(message)
        self.errors = errors or {}


class AuthenticationError(InkwellError):
    """The caller's credentials were rejected."""

    status_code = 401

    def __init__(self, message: str = "invalid credentials"):
        super().__init__(message)


class NotFoundError(InkwellError):
    """A session, question or other resource does not exist."""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[object] = None):
        """
        Initialize the not found error.

        Args:
            resource_type: Kind of resource that was looked up ("Session", "Question", ...)
            resource_id: Identifier that was looked up; not part of the message
        """
        super().__init__(f"{resource_type} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(InkwellError):
    """A unique field already holds the submitted value."""

    status_code = 409

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message, original_exception)


class InternalError(InkwellError):
    """Store or infrastructure failure. The message stays opaque."""

    status_code = 500


class DatabaseError(InternalError):
    """Raised by repositories when the record store fails."""

    def __init__(self, message: str = "database error", original_exception: Optional[Exception] = None):
        super().__init__(message, original_exception)

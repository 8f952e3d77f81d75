"""
Register error taxonomy.

All errors are request-scoped: the register and its aggregates
are left untouched when one is raised.
"""

from typing import Optional


class RegisterError(Exception):
    """Base class for request-scoped register failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidEvent(RegisterError):
    """Event failed validation on insert (missing field or unknown status)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFound(RegisterError):
    """Delete target is absent."""

    status_code = 404


class Malformed(RegisterError):
    """Input could not be decoded."""

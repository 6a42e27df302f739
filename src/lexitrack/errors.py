"""Exceptions raised by lexitrack."""
from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Error categories."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LexitrackError(Exception):
    """Base error carrying a machine readable code and optional details."""

    code = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details


class ValidationError(LexitrackError):
    """Input record has an invalid shape or out-of-range values."""

    code = ErrorCode.VALIDATION_ERROR


class NotFoundError(LexitrackError):
    """Requested record does not exist."""

    code = ErrorCode.NOT_FOUND

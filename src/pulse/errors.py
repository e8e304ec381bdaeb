"""Structured error codes and error handling for Pulse.

Error codes follow the pattern: E{category}{number}
- E1xx: Argument validation errors (bucket generation, factory arguments)
- E2xx: Invalid operation errors (metric label state)
- E3xx: Configuration errors

Errors raised by the wrapped backend (duplicate registration, malformed
metric names) and by operations wrapped in ``count_exceptions`` are never
translated into these types.

Example:
    >>> from pulse.errors import InvalidArgumentError
    >>> raise InvalidArgumentError("count must be at least 1", details={"count": 0})
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Standardized error codes for Pulse."""

    # E1xx: Argument validation errors
    E100_INVALID_ARGUMENT = "E100"
    E101_INVALID_BUCKETS = "E101"

    # E2xx: Invalid operation errors
    E200_INVALID_OPERATION = "E200"
    E201_ALREADY_LABELLED = "E201"

    # E3xx: Configuration errors
    E300_CONFIG_ERROR = "E300"
    E301_INVALID_CONFIG_FILE = "E301"
    E302_CONFIG_VALIDATION_FAILED = "E302"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.E100_INVALID_ARGUMENT: "Invalid argument",
    ErrorCode.E101_INVALID_BUCKETS: "Invalid histogram bucket parameters",
    ErrorCode.E200_INVALID_OPERATION: "Invalid operation",
    ErrorCode.E201_ALREADY_LABELLED: "Metric is already labelled and cannot be labelled again",
    ErrorCode.E300_CONFIG_ERROR: "Configuration error",
    ErrorCode.E301_INVALID_CONFIG_FILE: "Invalid configuration file",
    ErrorCode.E302_CONFIG_VALIDATION_FAILED: "Configuration validation failed",
}


class PulseError(Exception):
    """Base exception for Pulse errors with structured error codes.

    Example:
        >>> try:
        ...     raise PulseError(ErrorCode.E100_INVALID_ARGUMENT, details={"start": -1})
        ... except PulseError as e:
        ...     print(e.to_dict())
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize Pulse error.

        Args:
            code: Error code from ErrorCode enum
            message: Custom message (uses default if not provided)
            details: Additional error details
        """
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown error")
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error_code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def log(self, level: int = logging.ERROR) -> None:
        """Log the error with its details flattened into the record.

        Args:
            level: Logging level (default: ERROR)
        """
        extra = {"error_code": self.code.value}
        for key, value in self.details.items():
            extra[f"detail_{key}"] = value
        logger.log(level, str(self), extra=extra)


# ---------------------------------------------------------------------------
# Specific exception classes
# ---------------------------------------------------------------------------


class InvalidArgumentError(PulseError, ValueError):
    """An argument is outside the range an operation accepts."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.E100_INVALID_ARGUMENT,
    ) -> None:
        super().__init__(code, message, details)


class InvalidOperationError(PulseError, RuntimeError):
    """The operation is not valid for the object's current state."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.E200_INVALID_OPERATION,
    ) -> None:
        super().__init__(code, message, details)


class ConfigurationError(PulseError, ValueError):
    """Metric definition file could not be read or validated."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E300_CONFIG_ERROR,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code, message, details)

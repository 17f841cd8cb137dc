"""
Configuration-error hierarchy for inputguard.

Purpose
-------
Define the structured exceptions raised when a validator is *used incorrectly*:
a required option is missing, bounds contradict each other, an option name or
encoding is unknown, or a validator definition cannot be resolved.

Responsibilities
----------------
- Clear base class (`InputGuardException`) with structured metadata
- Severity levels for logging and alerting decisions
- Stable error codes for programmatic handling

Non-Responsibilities
--------------------
- Validation failures. An invalid *input* never raises; validators return
  ``False`` and expose the failure reasons through ``get_messages()``.

Design Notes
------------
- All exceptions inherit from `InputGuardException`.
- Each exception carries:
  - `message`: human-readable description
  - `details`: additional structured context (dict)
  - `severity`: `ErrorSeverity` value for logging/alerting
  - `is_retryable`: always False for configuration errors by default
  - `error_code`: short, stable identifier for programmatic use
- `InvalidArgumentError` and `ValidatorNotFoundError` also derive from the
  matching builtin (`ValueError`, `LookupError`) so callers that only know the
  standard library still catch them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels for logging and alerting."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"  # Programmer error requiring attention
    CRITICAL = "critical"


class InputGuardException(Exception):
    """
    Base exception for all inputguard errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error
        severity: Error severity level for logging handlers
        is_retryable: Whether the operation can be retried
        error_code: Optional code for programmatic handling

    Example:
        >>> raise InputGuardException(
        ...     "Validator misconfigured",
        ...     {"option": "haystack"}
        ... )
    """

    DEFAULT_SEVERITY: ErrorSeverity = ErrorSeverity.ERROR
    DEFAULT_RETRYABLE: bool = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
        is_retryable: Optional[bool] = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = details or {}
        self.severity: ErrorSeverity = severity or self.DEFAULT_SEVERITY
        self.is_retryable: bool = (
            is_retryable if is_retryable is not None else self.DEFAULT_RETRYABLE
        )
        self.error_code: str = error_code or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
        }

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"severity={self.severity.value!r}"
            ")"
        )


class ConfigurationError(InputGuardException):
    """
    Raised when a validator or validator definition is configured incorrectly.

    Base class for all "used incorrectly" errors; catching it catches every
    error this package raises.
    """


class InvalidArgumentError(ConfigurationError, ValueError):
    """
    Raised when an option value is rejected.

    Examples: ``min`` greater than the bounded ``max``, an unknown encoding,
    an unknown option name or message kind.

    Args:
        message: Explanation of the rejected argument
        option: Name of the option that was rejected
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        option: Optional[str] = None,
        value: Any = None,
    ) -> None:
        self.option = option
        self.value = value
        super().__init__(
            message,
            details={
                "option": option,
                "value": repr(value),
            },
            error_code=f"INVALID_{option.upper()}" if option else "INVALID_ARGUMENT",
        )


class MissingOptionError(ConfigurationError):
    """
    Raised when a mandatory option has not been configured.

    Args:
        option: Name of the missing option
    """

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(
            f"{option} option is mandatory",
            details={"option": option},
            error_code=f"MISSING_{option.upper()}",
        )


class ValidatorNotFoundError(ConfigurationError, LookupError):
    """
    Raised when a validator name cannot be resolved by the factory.

    Args:
        name: The requested validator name
        available: Names the factory knows about
    """

    def __init__(self, name: str, available: Optional[list] = None) -> None:
        self.name = name
        self.available = sorted(available or [])
        super().__init__(
            f"Unknown validator '{name}'",
            details={
                "name": name,
                "available": self.available,
            },
            error_code="VALIDATOR_NOT_FOUND",
        )


def get_error_severity(exc: Exception) -> ErrorSeverity:
    """
    Get the severity level of an exception for logging.

    Args:
        exc: Exception to check

    Returns:
        ErrorSeverity level.
    """
    if isinstance(exc, InputGuardException):
        return exc.severity
    return ErrorSeverity.ERROR


def should_alert(exc: Exception) -> bool:
    """
    Determine if an exception should trigger alerting.

    Returns:
        True if severity is ERROR or CRITICAL, False otherwise.
    """
    severity = get_error_severity(exc)
    return severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)


__all__ = [
    "ErrorSeverity",
    "InputGuardException",
    "ConfigurationError",
    "InvalidArgumentError",
    "MissingOptionError",
    "ValidatorNotFoundError",
    "get_error_severity",
    "should_alert",
]

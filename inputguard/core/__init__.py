"""
Core layer for inputguard.

Purpose
-------
Provide a single import surface for the core subsystems:

- Configuration (Config, Environment)
- Logging (structured logging, logger factory)
- Validation (MembershipValidator, LengthRangeValidator)
- Exceptions (InputGuardException hierarchy)

Design Decisions
----------------
- This module is intentionally thin: no logic, no configuration, no I/O.
- Public API is explicit via __all__ to avoid leaking internal symbols.
"""

from inputguard.core.config import Config, Environment
from inputguard.core.exceptions import (
    ConfigurationError,
    ErrorSeverity,
    InputGuardException,
    InvalidArgumentError,
    MissingOptionError,
    ValidatorNotFoundError,
)
from inputguard.core.logging import get_logger, setup_logging
from inputguard.core.validation import (
    ComparisonMode,
    LengthRangeValidator,
    MembershipValidator,
)

__all__ = [
    "Config",
    "Environment",
    "ConfigurationError",
    "ErrorSeverity",
    "InputGuardException",
    "InvalidArgumentError",
    "MissingOptionError",
    "ValidatorNotFoundError",
    "get_logger",
    "setup_logging",
    "ComparisonMode",
    "LengthRangeValidator",
    "MembershipValidator",
]

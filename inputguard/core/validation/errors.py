"""
Single raise point for validator configuration errors.

Every misconfiguration passes through ``raise_configuration_error`` so it is
logged at debug level, with its error code, right before it propagates.
"""

from __future__ import annotations

from typing import NoReturn

from inputguard.core.exceptions import ConfigurationError
from inputguard.core.logging.logger import get_logger

logger = get_logger(__name__)


def raise_configuration_error(error: ConfigurationError) -> NoReturn:
    """Log and raise a configuration error."""
    logger.debug(
        "Validator misconfigured",
        extra={
            "error_code": error.error_code,
            "reason": error.message,
        },
    )
    raise error


__all__ = ["raise_configuration_error"]

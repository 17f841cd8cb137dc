"""
inputguard: membership and string-length validators.

>>> from inputguard import MembershipValidator, LengthRangeValidator
>>> MembershipValidator(haystack=[1, "a", 2.3]).is_valid("1")
True
>>> LengthRangeValidator(min=2, max=3).is_valid("abcd")
False
"""

from inputguard.core.exceptions import (
    ConfigurationError,
    InputGuardException,
    InvalidArgumentError,
    MissingOptionError,
    ValidatorNotFoundError,
)
from inputguard.core.validation import (
    AbstractValidator,
    ComparisonMode,
    LengthRangeOptions,
    LengthRangeValidator,
    MembershipOptions,
    MembershipValidator,
    MessageFormatter,
    TemplateMessageFormatter,
    create_validator,
    load_validators,
)

__version__ = "1.0.0"

__all__ = [
    "AbstractValidator",
    "ComparisonMode",
    "ConfigurationError",
    "InputGuardException",
    "InvalidArgumentError",
    "LengthRangeOptions",
    "LengthRangeValidator",
    "MembershipOptions",
    "MembershipValidator",
    "MessageFormatter",
    "MissingOptionError",
    "TemplateMessageFormatter",
    "ValidatorNotFoundError",
    "create_validator",
    "load_validators",
]

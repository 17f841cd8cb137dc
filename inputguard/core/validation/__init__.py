"""
inputguard Validation Package

Purpose
-------
Expose the validators and their building blocks:

- `MembershipValidator`: value present in a configured haystack
- `LengthRangeValidator`: string length within an inclusive range
- `ComparisonMode` and the pure comparison predicates
- Option dataclasses, the message formatter protocol, and the factory

Design Notes
------------
- Re-exports are explicit via __all__ to keep the public API intentional.
- Validators never raise for invalid input; they raise ConfigurationError
  subclasses only when used incorrectly.
"""

from inputguard.core.validation.base import AbstractValidator
from inputguard.core.validation.comparison import (
    ComparisonMode,
    compare,
    loose_equals,
    loose_safe_equals,
    strict_equals,
)
from inputguard.core.validation.factory import (
    available_validators,
    build_validators,
    create_validator,
    load_validators,
)
from inputguard.core.validation.length import LengthRangeValidator
from inputguard.core.validation.membership import MembershipValidator
from inputguard.core.validation.messages import MessageFormatter, TemplateMessageFormatter
from inputguard.core.validation.options import (
    LengthRangeOptions,
    MembershipOptions,
    ValidatorOptions,
)

__all__ = [
    "AbstractValidator",
    "ComparisonMode",
    "LengthRangeOptions",
    "LengthRangeValidator",
    "MembershipOptions",
    "MembershipValidator",
    "MessageFormatter",
    "TemplateMessageFormatter",
    "ValidatorOptions",
    "available_validators",
    "build_validators",
    "compare",
    "create_validator",
    "load_validators",
    "loose_equals",
    "loose_safe_equals",
    "strict_equals",
]

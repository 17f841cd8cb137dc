"""
Typed option structs for validators.

Validators accept either one of these dataclasses or a plain mapping with the
same keys (``{"haystack": [...], "strict": True}``), plus keyword overrides.
Mapping keys are checked against the dataclass fields so a typo fails loudly
instead of being ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Type, TypeVar, Union

from inputguard.core.exceptions import InvalidArgumentError
from inputguard.core.validation.comparison import ComparisonMode
from inputguard.core.validation.errors import raise_configuration_error

OptionsT = TypeVar("OptionsT", bound="ValidatorOptions")


@dataclass
class ValidatorOptions:
    """
    Options shared by every validator.

    Attributes:
        messages: Failure kind -> replacement message template
        value_obscured: Mask the validated value with ``*`` in messages
        message_length: Truncate messages to this many characters; ``None``
            uses ``Config.MESSAGE_LENGTH``, ``-1`` disables truncation
    """

    messages: Dict[str, str] = field(default_factory=dict)
    value_obscured: bool = False
    message_length: Optional[int] = None

    @classmethod
    def field_names(cls) -> list:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls: Type[OptionsT], mapping: Mapping) -> OptionsT:
        unknown = [key for key in mapping if key not in cls.field_names()]
        if unknown:
            raise_configuration_error(
                InvalidArgumentError(
                    f"Unknown option(s) for {cls.__name__}: {', '.join(map(str, unknown))}",
                    option=str(unknown[0]),
                    value=mapping[unknown[0]],
                )
            )
        return cls(**dict(mapping))


@dataclass
class MembershipOptions(ValidatorOptions):
    """
    Attributes:
        haystack: Reference collection; required before validation
        strict: ComparisonMode, or True (STRICT) / False (LOOSE_SAFE)
        recursive: Search nested collections instead of comparing them whole
    """

    haystack: Optional[Any] = None
    strict: Union[bool, str, ComparisonMode] = ComparisonMode.LOOSE_SAFE
    recursive: bool = False


@dataclass
class LengthRangeOptions(ValidatorOptions):
    """
    Attributes:
        min: Inclusive lower bound; negative values behave like 0
        max: Inclusive upper bound, ``None`` for unbounded
        encoding: Codec used to interpret text; ``None`` uses
            ``Config.DEFAULT_ENCODING``
    """

    min: int = 0
    max: Optional[int] = None
    encoding: Optional[str] = None


def resolve_options(
    options_cls: Type[OptionsT],
    options: Union[None, Mapping, ValidatorOptions],
    overrides: Dict[str, Any],
) -> OptionsT:
    """
    Merge constructor input into one ``options_cls`` instance.

    Keyword overrides win over values from ``options``.
    """
    if options is None:
        resolved = options_cls()
    elif isinstance(options, options_cls):
        resolved = options
    elif isinstance(options, Mapping):
        resolved = options_cls.from_mapping(options)
    else:
        raise_configuration_error(
            InvalidArgumentError(
                f"Options must be a mapping or {options_cls.__name__}, "
                f"got {type(options).__name__}",
                option="options",
                value=options,
            )
        )

    if overrides:
        # from_mapping rejects unknown keys before replace() sees them
        options_cls.from_mapping(overrides)
        resolved = replace(resolved, **overrides)
    return resolved


__all__ = [
    "LengthRangeOptions",
    "MembershipOptions",
    "ValidatorOptions",
    "resolve_options",
]

"""
String length validation within an inclusive ``[min, max]`` range.

Length is counted in Unicode code points, not bytes and not grapheme
clusters: ``"äöü"`` is 3 characters in every encoding, and a letter followed
by a combining accent counts as 2.

``str`` input is used directly but must be representable in the configured
encoding. ``bytes`` input is decoded with that encoding first. Anything else
is rejected with the ``stringLengthInvalid`` failure.
"""

from __future__ import annotations

import codecs
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from inputguard.core.config import Config
from inputguard.core.exceptions import InvalidArgumentError
from inputguard.core.validation.base import AbstractValidator
from inputguard.core.validation.errors import raise_configuration_error
from inputguard.core.validation.messages import MessageFormatter
from inputguard.core.validation.options import LengthRangeOptions, resolve_options


def _check_bound(option: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise_configuration_error(
            InvalidArgumentError(
                f"The {option} length must be an integer, got {type(value).__name__}",
                option=option,
                value=value,
            )
        )


def _min_error(minimum: int, maximum: int) -> InvalidArgumentError:
    return InvalidArgumentError(
        "The minimum must be less than or equal to the maximum length, "
        f"but {minimum} > {maximum}",
        option="min",
        value=minimum,
    )


class LengthRangeValidator(AbstractValidator):
    """
    Validate that a string's character count lies within ``[min, max]``.

    Args:
        options: ``LengthRangeOptions`` or a mapping with the keys ``min``,
            ``max``, ``encoding`` (plus the shared ``messages``,
            ``value_obscured``, ``message_length``)
        formatter: Message formatter collaborator
        **kwargs: Same keys as ``options``; override it

    Example:
        >>> LengthRangeValidator(min=2, max=3).is_valid("ab")
        True
    """

    NAME = "length_range"

    INVALID = "stringLengthInvalid"
    TOO_SHORT = "stringLengthTooShort"
    TOO_LONG = "stringLengthTooLong"

    MESSAGE_TEMPLATES = {
        INVALID: "Invalid type given. String expected",
        TOO_SHORT: "The input is less than %min% characters long",
        TOO_LONG: "The input is more than %max% characters long",
    }

    MESSAGE_VARIABLES = ("min", "max", "length")

    def __init__(
        self,
        options: Union[None, Mapping, LengthRangeOptions] = None,
        *,
        formatter: Optional[MessageFormatter] = None,
        **kwargs: Any,
    ) -> None:
        resolved = resolve_options(LengthRangeOptions, options, kwargs)
        super().__init__(resolved, formatter)

        _check_bound("min", resolved.min)
        if resolved.max is not None:
            _check_bound("max", resolved.max)
            if resolved.min > resolved.max:
                raise_configuration_error(_min_error(resolved.min, resolved.max))

        self._min: int = resolved.min
        self._max: Optional[int] = resolved.max
        self._length: Optional[int] = None
        self._encoding: str = Config.DEFAULT_ENCODING
        self.set_encoding(resolved.encoding or Config.DEFAULT_ENCODING)

    # =========================================================================
    # Options
    # =========================================================================

    @property
    def min(self) -> int:
        return self._min

    def set_min(self, minimum: int) -> "LengthRangeValidator":
        """
        Set the inclusive lower bound.

        Raises:
            InvalidArgumentError: If ``minimum`` exceeds a bounded maximum;
                the current bounds are left untouched
        """
        _check_bound("min", minimum)
        if self._max is not None and minimum > self._max:
            raise_configuration_error(_min_error(minimum, self._max))
        self._min = minimum
        return self

    @property
    def max(self) -> Optional[int]:
        return self._max

    def set_max(self, maximum: Optional[int]) -> "LengthRangeValidator":
        """
        Set the inclusive upper bound; ``None`` removes it.

        Raises:
            InvalidArgumentError: If ``maximum`` is below the minimum; the
                current bounds are left untouched
        """
        if maximum is None:
            self._max = None
            return self

        _check_bound("max", maximum)
        if maximum < self._min:
            raise_configuration_error(
                InvalidArgumentError(
                    "The maximum must be greater than or equal to the minimum length, "
                    f"but {maximum} < {self._min}",
                    option="max",
                    value=maximum,
                )
            )
        self._max = maximum
        return self

    @property
    def encoding(self) -> str:
        return self._encoding

    def set_encoding(self, encoding: str) -> "LengthRangeValidator":
        """
        Set the encoding used to interpret input.

        Raises:
            InvalidArgumentError: If Python has no codec for ``encoding``
        """
        try:
            codecs.lookup(encoding)
        except (LookupError, TypeError):
            raise_configuration_error(
                InvalidArgumentError(
                    f"Given encoding '{encoding}' is not supported",
                    option="encoding",
                    value=encoding,
                )
            )
        self._encoding = encoding
        return self

    @property
    def length(self) -> Optional[int]:
        """Character count of the most recently validated string."""
        return self._length

    # =========================================================================
    # Validation
    # =========================================================================

    def is_valid(self, value: Any) -> bool:
        self._set_value(value)
        self._length = None

        text = self._to_text(value)
        if text is None:
            self._error(self.INVALID)
            return False

        self._length = len(text)

        if self._length < max(0, self._min):
            self._error(self.TOO_SHORT)

        if self._max is not None and self._length > self._max:
            self._error(self.TOO_LONG)

        return not self._messages

    def _to_text(self, value: Any) -> Optional[str]:
        try:
            if isinstance(value, str):
                value.encode(self._encoding)
                return value
            if isinstance(value, (bytes, bytearray)):
                return bytes(value).decode(self._encoding)
        except UnicodeError:
            return None
        return None

    def _variable_values(self) -> Dict[str, Any]:
        return {
            "min": self._min,
            "max": self._max,
            "length": self._length,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"min={self._min!r}, max={self._max!r}, encoding={self._encoding!r})"
        )

"""
Membership validation: is a value present in a reference collection?

Usage
-----
    from inputguard import MembershipValidator, ComparisonMode

    validator = MembershipValidator(haystack=[1, "a", 2.3])
    validator.is_valid("1")        # True  (LOOSE_SAFE: "1" equals 1)
    validator.is_valid("1abc")     # False (no numeric-prefix coercion)

    validator.set_strict(ComparisonMode.STRICT).is_valid("1")   # False

Haystack elements are either scalars or collections (mappings, sequences,
sets; strings are scalars). Non-recursive search compares every top-level
element with the value, collections included. Recursive search walks the
collections depth-first and compares only their scalar leaves.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import Any, Deque, Iterator, Optional, Set, Union

from inputguard.core.exceptions import InvalidArgumentError, MissingOptionError
from inputguard.core.validation.base import AbstractValidator
from inputguard.core.validation.comparison import (
    ComparisonMode,
    get_comparator,
    is_collection,
    iter_elements,
    prepare_safe_needle,
)
from inputguard.core.validation.errors import raise_configuration_error
from inputguard.core.validation.messages import MessageFormatter
from inputguard.core.validation.options import MembershipOptions, resolve_options

_EXHAUSTED = object()


class MembershipValidator(AbstractValidator):
    """
    Validate that a value equals an element of the configured haystack.

    Args:
        options: ``MembershipOptions`` or a mapping with the keys
            ``haystack``, ``strict``, ``recursive`` (plus the shared
            ``messages``, ``value_obscured``, ``message_length``)
        formatter: Message formatter collaborator
        **kwargs: Same keys as ``options``; override it
    """

    NAME = "membership"

    NOT_IN_ARRAY = "notInArray"

    MESSAGE_TEMPLATES = {
        NOT_IN_ARRAY: "The input was not found in the haystack",
    }

    def __init__(
        self,
        options: Union[None, Mapping, MembershipOptions] = None,
        *,
        formatter: Optional[MessageFormatter] = None,
        **kwargs: Any,
    ) -> None:
        resolved = resolve_options(MembershipOptions, options, kwargs)
        super().__init__(resolved, formatter)

        self._haystack: Optional[Any] = None
        self._mode: ComparisonMode = ComparisonMode.LOOSE_SAFE
        self._recursive: bool = False

        if resolved.haystack is not None:
            self.set_haystack(resolved.haystack)
        self.set_strict(resolved.strict)
        self.set_recursive(resolved.recursive)

    # =========================================================================
    # Options
    # =========================================================================

    @property
    def haystack(self) -> Any:
        """
        The configured haystack.

        Raises:
            MissingOptionError: If no haystack has been configured
        """
        if self._haystack is None:
            raise_configuration_error(MissingOptionError("haystack"))
        return self._haystack

    @haystack.setter
    def haystack(self, haystack: Any) -> None:
        self.set_haystack(haystack)

    def set_haystack(self, haystack: Any) -> "MembershipValidator":
        if not is_collection(haystack):
            raise_configuration_error(
                InvalidArgumentError(
                    f"Haystack must be a collection, got {type(haystack).__name__}",
                    option="haystack",
                    value=haystack,
                )
            )
        self._haystack = haystack
        return self

    @property
    def strict(self) -> ComparisonMode:
        return self._mode

    @strict.setter
    def strict(self, mode: Union[bool, str, ComparisonMode]) -> None:
        self.set_strict(mode)

    def set_strict(self, mode: Union[bool, str, ComparisonMode]) -> "MembershipValidator":
        """
        Select the comparison mode.

        Accepts a ``ComparisonMode``, its string value, or a bool
        (True -> STRICT, False -> LOOSE_SAFE).
        """
        try:
            self._mode = ComparisonMode.coerce(mode)
        except ValueError:
            raise_configuration_error(
                InvalidArgumentError(
                    f"Unknown comparison mode {mode!r}; expected one of "
                    f"{', '.join(m.value for m in ComparisonMode)}",
                    option="strict",
                    value=mode,
                )
            )
        return self

    @property
    def recursive(self) -> bool:
        return self._recursive

    @recursive.setter
    def recursive(self, recursive: bool) -> None:
        self.set_recursive(recursive)

    def set_recursive(self, recursive: bool) -> "MembershipValidator":
        self._recursive = bool(recursive)
        return self

    # =========================================================================
    # Validation
    # =========================================================================

    def is_valid(self, value: Any) -> bool:
        haystack = self.haystack
        self._set_value(value)

        comparator = get_comparator(self._mode)
        needle = value
        if self._mode is ComparisonMode.LOOSE_SAFE:
            needle = prepare_safe_needle(value)

        elements = self._walk(haystack) if self._recursive else iter_elements(haystack)
        for element in elements:
            if comparator(needle, element):
                return True

        self._error(self.NOT_IN_ARRAY)
        return False

    @staticmethod
    def _walk(collection: Any) -> Iterator[Any]:
        """
        Depth-first, pre-order walk yielding scalar leaves.

        Iterative over an explicit stack of iterators; each collection is
        entered at most once.
        """
        visited: Set[int] = {id(collection)}
        stack: Deque[Iterator[Any]] = deque([iter_elements(collection)])
        while stack:
            element = next(stack[-1], _EXHAUSTED)
            if element is _EXHAUSTED:
                stack.pop()
            elif is_collection(element):
                if id(element) not in visited:
                    visited.add(id(element))
                    stack.append(iter_elements(element))
            else:
                yield element

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"strict={self._mode.value!r}, "
            f"recursive={self._recursive!r}, "
            f"haystack_set={self._haystack is not None!r})"
        )

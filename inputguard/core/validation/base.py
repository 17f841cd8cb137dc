"""
Validator base class.

Purpose
-------
Own everything the concrete validators have in common: the failure-message
state, the message templates and their variables, value obscuring, message
truncation and the formatter collaborator.

Contract
--------
- ``is_valid(value)`` never raises for bad *input*; it returns False and
  records one message per failure kind, retrievable with ``get_messages()``.
- Misuse (missing or contradictory options) raises a ``ConfigurationError``.
- Every ``is_valid`` call starts by clearing the previous messages.

Thread Safety
-------------
Instances hold mutable configuration and the last call's messages. Share an
instance across threads only for read-only validation where nobody reads
``get_messages()``; never reconfigure it while another thread validates.

Observability
-------------
Validation failures are logged at debug level with ``validator``, ``kind`` and
``raw_value``. Configuration errors are logged at debug level right before
they are raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from inputguard.core.config import Config
from inputguard.core.exceptions import InvalidArgumentError
from inputguard.core.logging.logger import get_logger
from inputguard.core.validation.errors import raise_configuration_error
from inputguard.core.validation.messages import (
    MessageFormatter,
    TemplateMessageFormatter,
    obscure,
    truncate,
)
from inputguard.core.validation.options import ValidatorOptions

logger = get_logger(__name__)


class AbstractValidator(ABC):
    """
    Base class for all validators.

    Subclasses declare ``NAME``, ``MESSAGE_TEMPLATES`` (kind -> template) and
    ``MESSAGE_VARIABLES`` (placeholder names), then implement ``is_valid`` and
    ``_variable_values``.
    """

    NAME: ClassVar[str] = "abstract"
    MESSAGE_TEMPLATES: ClassVar[Dict[str, str]] = {}
    MESSAGE_VARIABLES: ClassVar[Tuple[str, ...]] = ()

    def __init__(
        self,
        options: ValidatorOptions,
        formatter: Optional[MessageFormatter] = None,
    ) -> None:
        self._message_templates: Dict[str, str] = dict(self.MESSAGE_TEMPLATES)
        self._messages: Dict[str, str] = {}
        self._value: Any = None

        self.formatter: MessageFormatter = formatter or TemplateMessageFormatter()
        self.value_obscured: bool = bool(options.value_obscured)
        self.message_length: int = Config.MESSAGE_LENGTH
        if options.message_length is not None:
            self.set_message_length(options.message_length)

        if options.messages is not None:
            self.set_messages(options.messages)

    # =========================================================================
    # Validation contract
    # =========================================================================

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """Return True when ``value`` passes; otherwise record messages and return False."""

    def __call__(self, value: Any) -> bool:
        return self.is_valid(value)

    def get_messages(self) -> Dict[str, str]:
        """Failure kind -> message for the most recent ``is_valid`` call."""
        return dict(self._messages)

    @property
    def value(self) -> Any:
        """The value passed to the most recent ``is_valid`` call."""
        return self._value

    # =========================================================================
    # Message templates
    # =========================================================================

    @property
    def message_templates(self) -> Dict[str, str]:
        return dict(self._message_templates)

    @property
    def message_variables(self) -> List[str]:
        return list(self.MESSAGE_VARIABLES)

    def set_message(self, message: str, kind: Optional[str] = None) -> "AbstractValidator":
        """
        Replace the template for ``kind``, or for every kind when omitted.

        Raises:
            InvalidArgumentError: If ``kind`` is not a failure kind of this validator
        """
        if kind is None:
            for existing in self._message_templates:
                self._message_templates[existing] = message
            return self

        if kind not in self._message_templates:
            raise_configuration_error(
                InvalidArgumentError(
                    f"No message template exists for key '{kind}'",
                    option="messages",
                    value=kind,
                )
            )

        self._message_templates[kind] = message
        return self

    def set_messages(self, messages: Mapping) -> "AbstractValidator":
        """
        Replace several templates at once.

        Every kind is checked before any template changes, so a rejected
        mapping leaves the validator as it was.
        """
        if not isinstance(messages, Mapping):
            raise_configuration_error(
                InvalidArgumentError(
                    f"Messages must be a mapping of kind to template, got {type(messages).__name__}",
                    option="messages",
                    value=messages,
                )
            )

        unknown = [kind for kind in messages if kind not in self._message_templates]
        if unknown:
            raise_configuration_error(
                InvalidArgumentError(
                    f"No message template exists for key '{unknown[0]}'",
                    option="messages",
                    value=unknown[0],
                )
            )

        for kind, message in messages.items():
            self._message_templates[kind] = message
        return self

    def set_message_length(self, message_length: int) -> "AbstractValidator":
        """Set message truncation; ``-1`` disables it."""
        if (
            isinstance(message_length, bool)
            or not isinstance(message_length, int)
            or message_length < -1
        ):
            raise_configuration_error(
                InvalidArgumentError(
                    f"The message length must be an integer >= -1, got {message_length!r}",
                    option="message_length",
                    value=message_length,
                )
            )
        self.message_length = message_length
        return self

    # =========================================================================
    # Helpers for subclasses
    # =========================================================================

    def _variable_values(self) -> Dict[str, Any]:
        return {}

    def _set_value(self, value: Any) -> None:
        self._value = value
        self._messages = {}

    def _create_message(self, kind: str, value: Any) -> str:
        template = self._message_templates[kind]
        shown = obscure(value) if self.value_obscured else value
        message = self.formatter.format(kind, template, shown, self._variable_values())
        return truncate(message, self.message_length)

    def _error(self, kind: str) -> None:
        self._messages[kind] = self._create_message(kind, self._value)
        logger.debug(
            "Validation failed",
            extra={
                "validator": self.NAME,
                "kind": kind,
                "raw_value": "***" if self.value_obscured else repr(self._value),
            },
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

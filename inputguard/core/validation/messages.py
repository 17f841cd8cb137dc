"""
Failure-message formatting for validators.

A validator only knows *which* failure happened (a kind identifier such as
``notInArray``) and which variables describe it. Turning that into text is
delegated to a ``MessageFormatter`` so applications can plug in translation or
their own wording without touching validator code.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Protocol, runtime_checkable

from inputguard.core.validation.comparison import is_collection, number_to_string


@runtime_checkable
class MessageFormatter(Protocol):
    """Turns a failure kind plus its context into a human-readable message."""

    def format(
        self,
        kind: str,
        template: str,
        value: Any,
        variables: Dict[str, Any],
    ) -> str:
        ...


def stringify_value(value: Any) -> str:
    """Render an arbitrary validated value for inclusion in a message."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return number_to_string(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, Mapping):
        return ", ".join(stringify_value(v) for v in value.values())
    if is_collection(value):
        return ", ".join(stringify_value(v) for v in value)
    return type(value).__name__


def obscure(value: Any) -> str:
    return "*" * len(stringify_value(value))


def truncate(message: str, message_length: int) -> str:
    """Cut ``message`` to ``message_length`` characters ending in ``...``; -1 disables."""
    if 0 <= message_length < len(message):
        return message[: max(message_length - 3, 0)] + "..."
    return message


class TemplateMessageFormatter:
    """Default formatter: substitutes ``%value%`` and ``%<variable>%`` placeholders."""

    def format(
        self,
        kind: str,
        template: str,
        value: Any,
        variables: Dict[str, Any],
    ) -> str:
        message = template.replace("%value%", stringify_value(value))
        for name, variable in variables.items():
            message = message.replace(f"%{name}%", stringify_value(variable))
        return message


__all__ = [
    "MessageFormatter",
    "TemplateMessageFormatter",
    "obscure",
    "stringify_value",
    "truncate",
]

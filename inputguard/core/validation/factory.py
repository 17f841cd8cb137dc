"""
Build validators by name, individually or from YAML definitions.

Names are matched case-insensitively with ``-`` and ``_`` ignored, so
``"length_range"``, ``"LengthRange"`` and ``"string-length"`` all resolve.

YAML layout::

    validators:
      country:
        type: membership
        options:
          haystack: [de, fr, it]
          strict: true
      username:
        type: length_range
        options:
          min: 3
          max: 32
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import IO, Any, Dict, Optional, Type, Union

import yaml

from inputguard.core.exceptions import ConfigurationError, ValidatorNotFoundError
from inputguard.core.logging.logger import get_logger
from inputguard.core.validation.base import AbstractValidator
from inputguard.core.validation.errors import raise_configuration_error
from inputguard.core.validation.length import LengthRangeValidator
from inputguard.core.validation.membership import MembershipValidator

logger = get_logger(__name__)

_REGISTRY: Dict[str, Type[AbstractValidator]] = {
    "membership": MembershipValidator,
    "inarray": MembershipValidator,
    "lengthrange": LengthRangeValidator,
    "stringlength": LengthRangeValidator,
}


def _normalize(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def available_validators() -> list:
    return sorted(_REGISTRY)


def create_validator(
    name: str,
    options: Optional[Mapping] = None,
) -> AbstractValidator:
    """
    Instantiate the validator registered under ``name``.

    Raises:
        ValidatorNotFoundError: If ``name`` is not registered
        ConfigurationError: If ``options`` are rejected by the validator
    """
    validator_cls = _REGISTRY.get(_normalize(str(name)))
    if validator_cls is None:
        raise_configuration_error(ValidatorNotFoundError(str(name), list(_REGISTRY)))
    return validator_cls(options or {})


def _parse(stream: IO[str], origin: str) -> Any:
    try:
        return yaml.safe_load(stream)
    except yaml.YAMLError as exc:
        logger.debug(
            "Validator definitions are not valid YAML",
            extra={"source": origin, "reason": str(exc)},
        )
        raise ConfigurationError(
            f"{origin}: invalid YAML: {exc}",
            details={"source": origin},
            error_code="DEFINITIONS_MALFORMED",
        ) from exc


def load_validators(source: Union[str, Path, IO[str]]) -> Dict[str, AbstractValidator]:
    """
    Build every validator defined in a YAML document.

    Args:
        source: Path to a YAML file, or an open text stream

    Returns:
        Definition name -> configured validator, in document order

    Raises:
        ConfigurationError: If the document or one of its definitions is malformed
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        origin = str(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = _parse(f, origin)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read validator definitions from {path}: {exc}",
                details={"path": origin},
                error_code="DEFINITIONS_UNREADABLE",
            ) from exc
    else:
        origin = getattr(source, "name", "<stream>")
        document = _parse(source, origin)

    validators = build_validators(document, origin=origin)
    logger.info(
        f"Loaded {len(validators)} validator definitions",
        extra={"source": origin, "validator_count": len(validators)},
    )
    return validators


def build_validators(document: Any, origin: str = "<mapping>") -> Dict[str, AbstractValidator]:
    """Build validators from an already-parsed definitions document."""
    definitions = document.get("validators") if isinstance(document, Mapping) else None
    if not isinstance(definitions, Mapping):
        raise_configuration_error(
            ConfigurationError(
                f"{origin}: expected a top-level 'validators' mapping",
                details={"source": origin},
                error_code="DEFINITIONS_MALFORMED",
            )
        )

    validators: Dict[str, AbstractValidator] = {}
    for name, definition in definitions.items():
        if not isinstance(definition, Mapping) or "type" not in definition:
            raise_configuration_error(
                ConfigurationError(
                    f"{origin}: validator '{name}' needs a 'type'",
                    details={"source": origin, "validator": name},
                    error_code="DEFINITIONS_MALFORMED",
                )
            )

        options = definition.get("options") or {}
        if not isinstance(options, Mapping):
            raise_configuration_error(
                ConfigurationError(
                    f"{origin}: options of validator '{name}' must be a mapping",
                    details={"source": origin, "validator": name},
                    error_code="DEFINITIONS_MALFORMED",
                )
            )

        validators[str(name)] = create_validator(definition["type"], options)

    return validators


__all__ = [
    "available_validators",
    "build_validators",
    "create_validator",
    "load_validators",
]

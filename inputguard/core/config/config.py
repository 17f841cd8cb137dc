"""
Static configuration management for inputguard.

Purpose
-------
Provides centralized static configuration loaded from environment variables
with sensible defaults and type validation. Values are read once at import and
can be reloaded explicitly.

Responsibilities
----------------
- Load configuration from environment variables, plus an opt-in .env file
- Provide type-safe access to all static configuration values
- Fall back to documented defaults (with a warning) on malformed values
- Track which values came from the environment and which from defaults

Non-Responsibilities
--------------------
- Per-validator options (handled by the validation option dataclasses)
- Logging setup (handled by inputguard.core.logging)

Architecture Notes
------------------
- Singleton pattern via class methods (no instantiation)
- Auto-loads on module import via Config.load(), reading only os.environ
- A .env file is read only when the application passes its path to
  Config.load(dotenv_path=...); importing the package never touches the disk

Dependencies
------------
- python-dotenv: Environment variable loading
- logging: Basic logging (bootstrap only)

Environment Variables
---------------------
- INPUTGUARD_ENV: Environment type (default: development)
- INPUTGUARD_LOG_LEVEL: Logging level (default: INFO)
- INPUTGUARD_LOG_JSON: Force JSON logs on/off (default: production only)
- INPUTGUARD_DEFAULT_ENCODING: Encoding for length validation (default: UTF-8)
- INPUTGUARD_MESSAGE_LENGTH: Default message truncation, -1 = off (default: -1)
"""

import codecs
import logging
import os
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Parse environment string safely with fallback.

        Example
        -------
        >>> Environment.from_string("production") == Environment.PRODUCTION
        True
        >>> Environment.from_string("invalid") == Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.lower())
        except ValueError:
            logging.warning(
                f"Unknown environment '{value}', defaulting to development"
            )
            return cls.DEVELOPMENT


class _ConfigLoadMetrics:
    """
    Internal tracker for configuration loading.

    Records which configuration values came from environment variables versus
    defaults, and any validation errors encountered.
    """

    def __init__(self):
        self.env_vars_loaded: Dict[str, bool] = {}
        self.validation_errors: Dict[str, str] = {}
        self.defaults_used: Dict[str, Any] = {}
        self.last_reload: Optional[str] = None

    def record_env_load(self, key: str, from_env: bool, value: Any, default: Any):
        self.env_vars_loaded[key] = from_env
        if not from_env:
            self.defaults_used[key] = default

    def record_validation_error(self, key: str, error: str):
        self.validation_errors[key] = error

    def get_summary(self) -> Dict[str, Any]:
        return {
            "total_configs": len(self.env_vars_loaded),
            "from_environment": sum(1 for v in self.env_vars_loaded.values() if v),
            "from_defaults": sum(1 for v in self.env_vars_loaded.values() if not v),
            "validation_errors": len(self.validation_errors),
            "defaults_used": list(self.defaults_used.keys()),
            "last_reload": self.last_reload,
        }


class Config:
    """
    Centralized static configuration for inputguard.

    Usage
    -----
    >>> Config.DEFAULT_ENCODING
    'UTF-8'
    >>> if Config.is_production():
    ...     logger.info("Running in production mode")
    """

    _metrics: Optional[_ConfigLoadMetrics] = None

    ENV_PREFIX: str = "INPUTGUARD_"

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None
    LOG_COLORS: bool = True

    DEFAULT_ENCODING: str = "UTF-8"
    MESSAGE_LENGTH: int = -1

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @classmethod
    def _init_metrics(cls):
        if cls._metrics is None:
            cls._metrics = _ConfigLoadMetrics()

    @classmethod
    def _env_key(cls, key: str) -> str:
        return f"{cls.ENV_PREFIX}{key}"

    @classmethod
    def _safe_int(
        cls,
        key: str,
        default: int,
        min_val: Optional[int] = None,
        max_val: Optional[int] = None,
    ) -> int:
        """
        Safely parse integer from environment with validation.

        Example
        -------
        >>> Config._safe_int("MESSAGE_LENGTH", -1, min_val=-1)
        -1
        """
        cls._init_metrics()
        env_key = cls._env_key(key)
        raw_value = os.getenv(env_key)

        if raw_value is None:
            cls._metrics.record_env_load(key, False, default, default)
            return default

        try:
            value = int(raw_value)
        except ValueError:
            error = f"{env_key}='{raw_value}' is not a valid integer, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        if min_val is not None and value < min_val:
            error = f"{env_key}={value} is below minimum {min_val}, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        if max_val is not None and value > max_val:
            error = f"{env_key}={value} exceeds maximum {max_val}, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        cls._metrics.record_env_load(key, True, value, default)
        return value

    @classmethod
    def _safe_bool(cls, key: str, default: Optional[bool]) -> Optional[bool]:
        """
        Safely parse boolean from environment.

        Recognizes: true/false, yes/no, 1/0, on/off (case-insensitive).
        """
        cls._init_metrics()
        env_key = cls._env_key(key)
        raw_value = os.getenv(env_key)

        if raw_value is None:
            cls._metrics.record_env_load(key, False, default, default)
            return default

        normalized = raw_value.lower().strip()
        if normalized in {"true", "yes", "1", "on"}:
            value = True
        elif normalized in {"false", "no", "0", "off"}:
            value = False
        else:
            error = f"{env_key}='{raw_value}' is not a valid boolean, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default

        cls._metrics.record_env_load(key, True, value, default)
        return value

    @classmethod
    def _safe_str(cls, key: str, default: str) -> str:
        cls._init_metrics()
        env_key = cls._env_key(key)
        value = os.getenv(env_key, default)
        cls._metrics.record_env_load(key, env_key in os.environ, value, default)
        return value

    @classmethod
    def _safe_encoding(cls, key: str, default: str) -> str:
        """Read an encoding name, rejecting codecs Python does not know."""
        value = cls._safe_str(key, default)
        try:
            codecs.lookup(value)
        except LookupError:
            error = f"{cls._env_key(key)}='{value}' is not a known encoding, using default {default}"
            logging.warning(error)
            cls._metrics.record_validation_error(key, error)
            return default
        return value

    # =========================================================================
    # Configuration Loading
    # =========================================================================

    @classmethod
    def load(cls, dotenv_path: Optional[Union[str, os.PathLike]] = None) -> None:
        """
        Load all configuration from environment variables.

        Called automatically on module import (without a .env file); call
        again to pick up environment changes.

        Args:
            dotenv_path: Optional .env file merged into ``os.environ`` first.
                Variables already set in the environment win.
        """
        if dotenv_path is not None:
            loaded = load_dotenv(dotenv_path, override=False)
            if not loaded:
                logging.warning(f"No variables loaded from dotenv file '{dotenv_path}'")

        cls._metrics = _ConfigLoadMetrics()

        cls.ENVIRONMENT = Environment.from_string(
            cls._safe_str("ENV", "development")
        ).value
        cls.LOG_LEVEL = cls._safe_str("LOG_LEVEL", "INFO").upper()
        if cls.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            logging.warning(f"Invalid LOG_LEVEL '{cls.LOG_LEVEL}', using INFO")
            cls.LOG_LEVEL = "INFO"
        cls.LOG_JSON = cls._safe_bool("LOG_JSON", None)
        cls.LOG_COLORS = bool(cls._safe_bool("LOG_COLORS", True))

        cls.DEFAULT_ENCODING = cls._safe_encoding("DEFAULT_ENCODING", "UTF-8")
        cls.MESSAGE_LENGTH = cls._safe_int("MESSAGE_LENGTH", -1, min_val=-1)

        cls._metrics.last_reload = datetime.now(timezone.utc).isoformat()

    # =========================================================================
    # Environment Checks
    # =========================================================================

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == Environment.PRODUCTION.value

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == Environment.DEVELOPMENT.value

    @classmethod
    def is_testing(cls) -> bool:
        return cls.ENVIRONMENT == Environment.TESTING.value

    # =========================================================================
    # Metrics & Summary
    # =========================================================================

    @classmethod
    def get_metrics(cls) -> Optional[_ConfigLoadMetrics]:
        return cls._metrics

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        """
        Get configuration summary for debugging.

        Example
        -------
        >>> Config.get_config_summary()["default_encoding"]
        'UTF-8'
        """
        return {
            "environment": cls.ENVIRONMENT,
            "log_level": cls.LOG_LEVEL,
            "log_json": cls.LOG_JSON,
            "default_encoding": cls.DEFAULT_ENCODING,
            "message_length": cls.MESSAGE_LENGTH,
        }

    @classmethod
    def reload_safe_configs(cls) -> None:
        """
        Reload values that can change without rebuilding validators.

        Validators read ``DEFAULT_ENCODING`` and ``MESSAGE_LENGTH`` at
        construction, so already-built instances keep their settings.
        """
        logger = logging.getLogger(__name__)
        logger.info("Reloading safe configuration values...")

        cls.LOG_LEVEL = cls._safe_str("LOG_LEVEL", cls.LOG_LEVEL).upper()
        cls.DEFAULT_ENCODING = cls._safe_encoding("DEFAULT_ENCODING", cls.DEFAULT_ENCODING)
        cls.MESSAGE_LENGTH = cls._safe_int("MESSAGE_LENGTH", cls.MESSAGE_LENGTH, min_val=-1)

        logger.info("Safe configuration values reloaded successfully")


Config.load()

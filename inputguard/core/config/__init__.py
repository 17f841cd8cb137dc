"""
Configuration package for inputguard.

Re-exports the static, environment-backed configuration used as the source of
defaults (encoding, message length, logging) for every validator.
"""

from inputguard.core.config.config import Config, Environment

__all__ = [
    "Config",
    "Environment",
]

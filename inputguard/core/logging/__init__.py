"""
inputguard Logging Infrastructure

Exports the structured logging subsystem, log context helpers,
and configuration interface.
"""

from inputguard.core.logging.logger import (
    ConsoleFormatter,
    ContextFilter,
    JSONFormatter,
    LogContext,
    LoggerConfig,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "LogContext",
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    "LoggerConfig",
    "ConsoleFormatter",
    "ContextFilter",
    "JSONFormatter",
]

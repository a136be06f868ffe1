"""
Telemetry module for ocpp-lib-python.

Provides structured logging with message-scoped context and masking of
credentials that travel inside payloads.
"""

from ocpp_lib_python.telemetry.context import (
    LogContext,
    clear_log_context,
    get_log_context,
    log_context,
    set_log_context,
)
from ocpp_lib_python.telemetry.logger import (
    JsonFormatter,
    LogLevel,
    OcppLibLogger,
    TextFormatter,
    get_logger,
)
from ocpp_lib_python.telemetry.masking import REDACTED, SensitiveDataMasker

__all__ = [
    "JsonFormatter",
    # Context
    "LogContext",
    "LogLevel",
    # Logger
    "OcppLibLogger",
    "REDACTED",
    # Masking
    "SensitiveDataMasker",
    "TextFormatter",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "log_context",
    "set_log_context",
]

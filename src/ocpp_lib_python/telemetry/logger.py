"""
Structured logging for ocpp-lib-python.

Library modules log through :func:`get_logger`, passing structured fields
as keyword arguments::

    logger = get_logger("ocpp_lib_python.registry")
    logger.debug("Feature registered", action="Heartbeat")

Records are rendered as JSON or as text, enriched with the message-scoped
context and masked for credentials.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from ocpp_lib_python.telemetry.context import get_log_context
from ocpp_lib_python.telemetry.masking import SensitiveDataMasker


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return logging.getLevelName(self.value)


_FIELDS_ATTR = "ocpp_fields"


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, _FIELDS_ATTR, None) or {}


class JsonFormatter(logging.Formatter):
    """Renders one JSON object per record.

    Context fields are nested under ``context``; structured fields passed
    to the logger are merged at the top level.
    """

    def __init__(
        self,
        masker: SensitiveDataMasker | None = None,
        include_timestamp: bool = True,
    ) -> None:
        super().__init__()
        self._masker = masker or SensitiveDataMasker()
        self._include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": self._masker.mask(record.getMessage()),
        }
        if self._include_timestamp:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            data["timestamp"] = created.isoformat(timespec="milliseconds").replace(
                "+00:00", "Z"
            )

        context = get_log_context().to_dict()
        if context:
            data["context"] = self._masker.mask_dict(context)
        data.update(self._masker.mask_dict(_record_fields(record)))

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter: ``time | level | logger | message | k=v ...``."""

    def __init__(
        self,
        masker: SensitiveDataMasker | None = None,
        include_context: bool = True,
    ) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._masker = masker or SensitiveDataMasker()
        self._include_context = include_context

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = self._masker.mask(super().formatMessage(record))

        fields: dict[str, Any] = {}
        if self._include_context:
            fields.update(get_log_context().to_dict())
        fields.update(_record_fields(record))
        if not fields:
            return line

        masked = self._masker.mask_dict(fields)
        return line + " | " + " ".join(f"{k}={v}" for k, v in masked.items())


class OcppLibLogger:
    """Logger for ocpp-lib-python with structured logging support.

    All library loggers share one handler. Until :meth:`configure` is
    called they write text to stderr at WARNING level.

    Example:
        >>> logger = OcppLibLogger.get_logger("ocpp_lib_python.registry")
        >>> logger.info("Feature registry sealed", features=8)
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel] = LogLevel.WARNING
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.INFO,
        format: str = "json",
        stream: Any = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        """Configure every library logger.

        Args:
            level: Minimum level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
            masker: Sensitive data masker
        """
        formatter: logging.Formatter = (
            JsonFormatter(masker=masker) if format == "json" else TextFormatter(masker=masker)
        )
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(formatter)

        cls._level = level
        cls._handler = handler
        for logger in cls._loggers.values():
            cls._attach(logger)

    @classmethod
    def _attach(cls, logger: logging.Logger) -> None:
        handler = cls._handler
        if handler is None:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(TextFormatter())
        logger.handlers = [handler]
        logger.setLevel(cls._level.to_logging_level())
        logger.propagate = False

    @classmethod
    def get_logger(cls, name: str) -> OcppLibLogger:
        """Get or create a logger.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        logger = cls._loggers.get(name)
        if logger is None:
            logger = logging.getLogger(name)
            cls._attach(logger)
            cls._loggers[name] = logger
        return cls(logger)

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check whether a message at ``level`` would be emitted."""
        return self._logger.isEnabledFor(level.to_logging_level())

    def log(
        self, level: LogLevel, msg: str, exc_info: bool = False, **fields: Any
    ) -> None:
        """Log a message with structured fields."""
        self._logger.log(
            level.to_logging_level(),
            msg,
            exc_info=exc_info,
            extra={_FIELDS_ATTR: fields},
        )

    def debug(self, msg: str, **fields: Any) -> None:
        self.log(LogLevel.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self.log(LogLevel.INFO, msg, **fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self.log(LogLevel.WARNING, msg, **fields)

    def error(self, msg: str, exc_info: bool = False, **fields: Any) -> None:
        self.log(LogLevel.ERROR, msg, exc_info=exc_info, **fields)

    def exception(self, msg: str, **fields: Any) -> None:
        """Log an error with the traceback of the exception being handled."""
        self.log(LogLevel.ERROR, msg, exc_info=True, **fields)


def get_logger(name: str) -> OcppLibLogger:
    """Get a library logger.

    Args:
        name: Logger name, conventionally the module path

    Returns:
        Logger instance
    """
    return OcppLibLogger.get_logger(name)

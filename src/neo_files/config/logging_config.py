"""Centralized logging configuration for neo-files.

Provides consistent, configurable logging with environment-based control
over verbosity and format.
"""

import logging
import logging.config
import os
from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Standard logging (info and above)
    VERBOSE = "VERBOSE"  # Same as normal, plus preview internals
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.INFO.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.INFO.value


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Preview internals that are chatty at INFO
    DEFAULT_QUIET_MODULES = [
        "neo_files.application.services.metadata_poller",
        "neo_files.infrastructure.generators.multipart_pipe",
    ]

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "PIL",
        "asyncio",
    ]

    @classmethod
    def configure(cls) -> None:
        """Configure logging based on environment variables."""
        log_level = os.getenv("LOG_LEVEL")
        log_verbosity = os.getenv("LOG_VERBOSITY", "NORMAL").upper()
        log_format = os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value)

        # An explicit level wins over the verbosity mode
        if log_level and log_level.upper() in LogLevel.__members__:
            effective_log_level = log_level.upper()
        else:
            effective_log_level = get_log_level_from_verbosity(log_verbosity)

        if log_format == LogFormat.JSON.value:
            format_string = '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}'
        elif log_format == LogFormat.DETAILED.value:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
        else:
            format_string = "%(asctime)s - %(levelname)s - %(message)s"

        logging_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {},
        }

        if log_verbosity != LogVerbosity.VERBOSE.value:
            for module in cls.DEFAULT_QUIET_MODULES:
                logging_config["loggers"][module] = {
                    "level": "WARNING" if effective_log_level != "DEBUG" else "DEBUG",
                    "handlers": ["console"],
                    "propagate": False,
                }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        logging.config.dictConfig(logging_config)

        logger = logging.getLogger(__name__)
        if effective_log_level == "DEBUG":
            logger.debug(f"Logging configured: level={effective_log_level}, format={log_format}")

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a configured logger for the given module name.

        Args:
            name: Module name (usually __name__)

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger."""
    return LoggingConfig.get_logger(name)

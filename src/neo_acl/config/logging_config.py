"""Logging setup for neo-acl.

The level comes from ``LOG_LEVEL`` or, when that is unset or unknown, from
the ``LOG_VERBOSITY`` preset. ``LOG_FORMAT`` picks the line layout. Only the
``neo_acl`` logger tree gets a handler; noisy client libraries are raised to
ERROR.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(str, Enum):
    """Accepted ``LOG_LEVEL`` values."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """``LOG_VERBOSITY`` presets."""
    QUIET = "QUIET"
    NORMAL = "NORMAL"
    VERBOSE = "VERBOSE"
    DEBUG = "DEBUG"


class LogFormat(str, Enum):
    """``LOG_FORMAT`` layouts."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


VERBOSITY_LEVELS = {
    LogVerbosity.QUIET: LogLevel.ERROR,
    LogVerbosity.NORMAL: LogLevel.WARNING,
    LogVerbosity.VERBOSE: LogLevel.INFO,
    LogVerbosity.DEBUG: LogLevel.DEBUG,
}

FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}

QUIET_LIBRARIES = ("redis", "httpx", "httpcore", "asyncio")


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Level for a verbosity preset; unknown presets count as NORMAL."""
    try:
        preset = LogVerbosity(verbosity.upper())
    except ValueError:
        preset = LogVerbosity.NORMAL
    return VERBOSITY_LEVELS[preset].value


def resolve_log_level(level: Optional[str], verbosity: str) -> str:
    """An explicit valid level wins over the verbosity preset."""
    if level and level.upper() in LogLevel.__members__:
        return level.upper()
    return get_log_level_from_verbosity(verbosity)


def build_logging_config(level: str, log_format: str) -> Dict[str, Any]:
    """dictConfig schema for the ``neo_acl`` logger tree."""
    try:
        format_string = FORMAT_STRINGS[LogFormat(log_format.lower())]
    except ValueError:
        format_string = FORMAT_STRINGS[LogFormat.SIMPLE]

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "acl": {"format": format_string, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "acl_console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "acl",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "neo_acl": {"level": level, "handlers": ["acl_console"], "propagate": True},
        },
    }
    config["loggers"].update({name: {"level": "ERROR"} for name in QUIET_LIBRARIES})
    return config


class LoggingConfig:
    """Applies the environment driven logging setup."""

    @classmethod
    def configure(cls) -> None:
        level = resolve_log_level(os.getenv("LOG_LEVEL"), os.getenv("LOG_VERBOSITY", "NORMAL"))
        log_format = os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value)

        logging.config.dictConfig(build_logging_config(level, log_format))
        logging.getLogger(__name__).debug(f"neo_acl logging at {level} ({log_format})")


def setup_logging() -> None:
    """Configure logging from the environment; run on package import."""
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually called with ``__name__``."""
    return logging.getLogger(name)

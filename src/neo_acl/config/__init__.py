"""Configuration for neo-acl: settings and logging."""

from .logging_config import (
    LogFormat,
    LogLevel,
    LogVerbosity,
    LoggingConfig,
    get_logger,
    setup_logging,
)
from .settings import AclBackendType, AclSettings, get_settings

__all__ = [
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "LoggingConfig",
    "get_logger",
    "setup_logging",
    "AclBackendType",
    "AclSettings",
    "get_settings",
]

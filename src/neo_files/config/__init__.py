"""Configuration management for neo-files."""

from .settings import (
    FileManagerSettings,
    PreviewConfig,
    ServerSettings,
    PREVIEW_DISABLED,
    get_settings,
)
from .logging_config import LoggingConfig, get_logger

__all__ = [
    "FileManagerSettings",
    "PreviewConfig",
    "ServerSettings",
    "PREVIEW_DISABLED",
    "get_settings",
    "LoggingConfig",
    "get_logger",
]

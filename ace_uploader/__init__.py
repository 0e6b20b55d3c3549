"""Configuration and adaptive upload policy for the ace-tool MCP uploader."""

from ace_uploader.errors import (
    AlreadyInitializedError,
    ConfigError,
    MissingArgumentError,
    NotInitializedError,
)
from ace_uploader.mcp_logger import LogLevel, NotificationChannel
from ace_uploader.settings import Config, ConfigStore, load_config
from ace_uploader.strategy import UploadStrategy, select_upload_strategy

__all__ = [
    "AlreadyInitializedError",
    "Config",
    "ConfigError",
    "ConfigStore",
    "LogLevel",
    "MissingArgumentError",
    "NotInitializedError",
    "NotificationChannel",
    "UploadStrategy",
    "load_config",
    "select_upload_strategy",
]

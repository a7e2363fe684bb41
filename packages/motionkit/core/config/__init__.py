"""Configuration management for motionkit."""

from motionkit.core.config.loader import (
    clear_app_config_cache,
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from motionkit.core.config.models import (
    AppConfig,
    ConfigBase,
    LoggingConfig,
    PlaybackConfig,
    StorageConfig,
)

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    "clear_app_config_cache",
    "configure_logging",
    # Models
    "ConfigBase",
    "AppConfig",
    "LoggingConfig",
    "PlaybackConfig",
    "StorageConfig",
]

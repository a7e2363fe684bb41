"""Configuration models for motionkit."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class ConfigBase(BaseModel):
    """Base class for all motionkit configurations.

    Provides common functionality for loading from files with defaults.
    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type.

        Subclasses must override this to provide their default location.
        """
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path or use default path.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If config is invalid
        """
        if cls.__name__ == "AppConfig":
            from motionkit.core.config.loader import load_app_config

            return load_app_config(path)  # type: ignore[return-value]

        from motionkit.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        raw = load_config(path)
        return cls.model_validate(raw)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file path (stdout if None)")


class PlaybackConfig(BaseModel):
    """Playback clock and authoring defaults."""

    fps: int = Field(default=60, gt=0, description="Frames per second of the playback clock")
    default_duration: int = Field(
        default=60, ge=0, description="Duration in frames for newly created entities"
    )


class StorageConfig(BaseModel):
    """Scene file settings."""

    scene_suffix: str = Field(default=".mkscene", pattern=r"^\.[A-Za-z0-9_]+$")


class AppConfig(ConfigBase):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")
    logging: LoggingConfig = LoggingConfig()
    playback: PlaybackConfig = PlaybackConfig()
    storage: StorageConfig = StorageConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("motionkit.yaml")

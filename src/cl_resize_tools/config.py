"""
Configuration for cl_resize_tools.

Uses Pydantic Settings, values come from CL_RESIZE_* environment variables
or a .env file.
"""

import sys
from functools import lru_cache
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .common.file_storage_impl import LocalFileStorage
from .plugins.image_resize.algo.geometry import DEFAULT_QUALITY, ResizeMode


class ResizeSettings(BaseSettings):
    """Resizer settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="CL_RESIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Mode applied when a request does not name one ("outbound"/"inset" accepted)
    mode: ResizeMode = ResizeMode.fill
    default_quality: int = Field(default=DEFAULT_QUALITY, ge=1, le=100)

    # Job storage root, see get_file_storage()
    storage_dir: Path = Path("/tmp/cl_resize_tools")

    log_level: str = "INFO"

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v: object) -> object:
        if isinstance(v, str):
            return ResizeMode.parse(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> ResizeSettings:
    """Get cached settings instance."""
    return ResizeSettings()


def configure_logging(settings: ResizeSettings | None = None) -> None:
    """Route loguru output to stderr at the configured level."""
    settings = settings or get_settings()
    logger.remove()
    _ = logger.add(sys.stderr, level=settings.log_level)


def get_file_storage(settings: ResizeSettings | None = None) -> LocalFileStorage:
    """LocalFileStorage rooted at the configured storage_dir."""
    settings = settings or get_settings()
    return LocalFileStorage(settings.storage_dir)

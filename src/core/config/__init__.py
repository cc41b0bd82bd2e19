"""Configuration management for build-bpf."""

from src.core.config.loader import ConfigLoader
from src.core.config.settings import LoggingSettings, SdkSettings, Settings

__all__ = [
    "ConfigLoader",
    "Settings",
    "SdkSettings",
    "LoggingSettings",
]

"""Exception definitions module."""

from src.core.exceptions.errors import (
    AmbiguousTargetError,
    BuildBpfError,
    ConfigurationError,
    MetadataError,
    StageExecutionError,
)

__all__ = [
    "BuildBpfError",
    "ConfigurationError",
    "MetadataError",
    "AmbiguousTargetError",
    "StageExecutionError",
]

"""Data models module."""

from src.models.build import (
    BuildOverrides,
    Config,
    PackageFacts,
    PipelineReport,
    PipelineStage,
    PipelineState,
    StageKind,
)

__all__ = [
    "BuildOverrides",
    "Config",
    "PackageFacts",
    "StageKind",
    "PipelineStage",
    "PipelineState",
    "PipelineReport",
]

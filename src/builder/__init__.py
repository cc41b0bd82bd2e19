"""Build orchestration for BPF programs.

This package provides:
- Resolution of the build configuration
- Package metadata inspection via ``cargo metadata``
- Planning and execution of the build, strip and dump stages
"""

from src.builder.metadata import MetadataInspector, facts_from_metadata
from src.builder.pipeline import BuildPipeline, build_args, plan_stages
from src.builder.resolver import ConfigResolver, default_sdk_path
from src.builder.runner import ProcessRunner, StageResult

__all__ = [
    "ConfigResolver",
    "default_sdk_path",
    "MetadataInspector",
    "facts_from_metadata",
    "BuildPipeline",
    "build_args",
    "plan_stages",
    "ProcessRunner",
    "StageResult",
]

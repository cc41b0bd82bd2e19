"""Build pipeline data models."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class BuildOverrides(BaseModel):
    """Raw values supplied on the command line, before resolution."""

    bpf_sdk: Path | None = Field(
        default=None,
        description="Explicit SDK root; computed from the executable when unset",
    )
    dump: bool = Field(
        default=False,
        description="Dump ELF information to a text file on success",
    )
    features: list[str] = Field(
        default_factory=list,
        description="Features to activate, in request order",
    )
    manifest_path: Path | None = Field(
        default=None,
        description="Path to Cargo.toml",
    )
    no_default_features: bool = Field(
        default=False,
        description="Do not activate the `default` feature",
    )


class Config(BaseModel):
    """Resolved, immutable build configuration."""

    sdk_path: Path = Field(description="Canonical path to the BPF SDK root")
    dump_requested: bool = Field(default=False)
    features: tuple[str, ...] = Field(default_factory=tuple)
    manifest_path: Path | None = Field(default=None)
    suppress_default_features: bool = Field(default=False)
    build_script: str = Field(default="rust/xargo-build.sh")
    strip_script: str = Field(default="scripts/strip.sh")
    dump_script: str = Field(default="scripts/dump.sh")

    model_config = {
        "frozen": True,
    }

    @property
    def build_program(self) -> Path:
        """Toolchain build script inside the SDK."""
        return self.sdk_path / self.build_script

    @property
    def strip_program(self) -> Path:
        """Strip script inside the SDK."""
        return self.sdk_path / self.strip_script

    @property
    def dump_program(self) -> Path:
        """Dump script inside the SDK."""
        return self.sdk_path / self.dump_script


class PackageFacts(BaseModel):
    """Facts derived from the root package's metadata."""

    root_package_name: str
    candidate_module_targets: tuple[str, ...] = Field(default_factory=tuple)
    legacy_feature_declared: bool = False
    package_directory: Path
    output_directory: Path

    model_config = {
        "frozen": True,
    }

    @property
    def program_name(self) -> str | None:
        """Module name of the single cdylib target, if there is exactly one.

        Cargo writes cdylib artifacts with underscores in place of hyphens.
        """
        if len(self.candidate_module_targets) != 1:
            return None
        return self.candidate_module_targets[0].replace("-", "_")


class StageKind(str, Enum):
    """External pipeline stage."""

    BUILD = "build"
    STRIP = "strip"
    DUMP = "dump"


class PipelineStage(BaseModel):
    """One external invocation of the pipeline."""

    kind: StageKind
    program: Path
    args: list[str] = Field(default_factory=list)
    cwd: Path
    input_artifact: Path | None = None
    output_artifact: Path | None = None

    def command(self) -> list[str]:
        """Full argv for the invocation."""
        return [str(self.program), *self.args]


class PipelineState(str, Enum):
    """Progress of a pipeline run."""

    IDLE = "idle"
    RESOLVING = "resolving"
    BUILDING = "building"
    NO_TARGET = "no_target"
    STRIPPING = "stripping"
    DUMPING = "dumping"
    DONE = "done"
    FAILED = "failed"


class PipelineReport(BaseModel):
    """Outcome of a pipeline run."""

    state: PipelineState = PipelineState.IDLE
    program_name: str | None = None
    stages: list[PipelineStage] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether every required stage ran or was correctly skipped."""
        return self.state in (PipelineState.DONE, PipelineState.NO_TARGET)

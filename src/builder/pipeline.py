"""Build pipeline: toolchain build, then strip and dump of the program.

Stage planning is a pure function of the resolved Config and the
PackageFacts; running walks the plan through a ProcessRunner and stops
at the first failure.
"""

from src.builder.metadata import LEGACY_PROGRAM_FEATURE, MetadataInspector
from src.builder.runner import ProcessRunner
from src.core.exceptions.errors import BuildBpfError
from src.core.logger.logger import get_logger
from src.models.build import (
    Config,
    PackageFacts,
    PipelineReport,
    PipelineStage,
    PipelineState,
    StageKind,
)

logger = get_logger(__name__)

NO_DEFAULT_FEATURES = "--no-default-features"
DUMP_UNSUPPORTED_NOTE = "Note: --dump is only available for crates with a cdylib target"

_STAGE_STATES = {
    StageKind.BUILD: PipelineState.BUILDING,
    StageKind.STRIP: PipelineState.STRIPPING,
    StageKind.DUMP: PipelineState.DUMPING,
}


def build_args(config: Config, facts: PackageFacts) -> list[str]:
    """Arguments for the toolchain build script.

    Requested flags come first, in request order. A declared legacy
    ``program`` feature then forces ``--no-default-features`` (once) and
    ``--features=program`` on top of them.
    """
    args: list[str] = []
    if config.suppress_default_features:
        args.append(NO_DEFAULT_FEATURES)
    for feature in config.features:
        args.extend(["--features", feature])
    if facts.legacy_feature_declared:
        if not config.suppress_default_features:
            args.append(NO_DEFAULT_FEATURES)
        args.append(f"--features={LEGACY_PROGRAM_FEATURE}")
    return args


def plan_stages(config: Config, facts: PackageFacts) -> list[PipelineStage]:
    """Ordered stage descriptors for one run."""
    cwd = facts.package_directory
    stages = [
        PipelineStage(
            kind=StageKind.BUILD,
            program=config.build_program,
            args=build_args(config, facts),
            cwd=cwd,
        )
    ]

    program_name = facts.program_name
    if program_name is None:
        return stages

    unstripped = facts.output_directory / f"{program_name}.so"
    stripped = cwd / f"{program_name}.so"
    stages.append(
        PipelineStage(
            kind=StageKind.STRIP,
            program=config.strip_program,
            args=[str(unstripped), str(stripped)],
            cwd=cwd,
            input_artifact=unstripped,
            output_artifact=stripped,
        )
    )

    if config.dump_requested:
        dump = cwd / f"{program_name}-dump.txt"
        stages.append(
            PipelineStage(
                kind=StageKind.DUMP,
                program=config.dump_program,
                args=[str(unstripped), str(dump)],
                cwd=cwd,
                input_artifact=unstripped,
                output_artifact=dump,
            )
        )
    return stages


class BuildPipeline:
    """Runs the build, strip and dump stages for one package."""

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        inspector: MetadataInspector | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            runner: Runner for external stages.
            inspector: Metadata inspector used when no facts are supplied.
        """
        self.runner = runner or ProcessRunner()
        self.inspector = inspector or MetadataInspector()
        self.report = PipelineReport()

    def run(self, config: Config, facts: PackageFacts | None = None) -> PipelineReport:
        """Execute the pipeline.

        Args:
            config: Resolved build configuration.
            facts: Package facts; queried from metadata when omitted.

        Returns:
            PipelineReport describing the completed run.

        Raises:
            BuildBpfError: On metadata failure or any stage failure. The
                report is left in the FAILED state.
        """
        self.report = PipelineReport()
        try:
            self._transition(PipelineState.RESOLVING)
            if facts is None:
                facts = self.inspector.inspect(config.manifest_path)
            self.report.program_name = facts.program_name

            self._log_summary(config, facts)
            for stage in plan_stages(config, facts):
                self._transition(_STAGE_STATES[stage.kind])
                result = self.runner.spawn_and_wait(
                    stage.program, stage.args, cwd=stage.cwd, stage=stage.kind.value
                )
                logger.debug(f"{stage.kind.value} finished in {result.duration_seconds:.1f}s")
                self.report.stages.append(stage)
        except BuildBpfError:
            self._transition(PipelineState.FAILED)
            raise

        if facts.program_name is None:
            if config.dump_requested:
                logger.info(DUMP_UNSUPPORTED_NOTE)
                self.report.notes.append(DUMP_UNSUPPORTED_NOTE)
            self._transition(PipelineState.NO_TARGET)
        else:
            self._transition(PipelineState.DONE)
        return self.report

    def _transition(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.report.state.value} -> {state.value}")
        self.report.state = state

    def _log_summary(self, config: Config, facts: PackageFacts) -> None:
        logger.info(f"BPF SDK: {config.sdk_path}")
        if config.suppress_default_features:
            logger.info("No default features")
        if config.features:
            logger.info(f"Features: {' '.join(config.features)}")
        if facts.legacy_feature_declared:
            logger.info("Legacy program feature detected")

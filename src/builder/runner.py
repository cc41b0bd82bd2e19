"""Synchronous runner for external pipeline stages."""

import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from src.core.exceptions.errors import StageExecutionError
from src.core.logger.logger import echo_command


@dataclass
class StageResult:
    """Result of a completed external invocation.

    Attributes:
        command: The argv that was executed.
        duration_seconds: Wall time spent waiting for the program.
    """

    command: list[str]
    duration_seconds: float = 0.0


class ProcessRunner:
    """Launches external programs one at a time and waits for them.

    Output of the child is not captured; it goes straight to the
    operator's terminal. There is no timeout.
    """

    def spawn_and_wait(
        self,
        program: Path,
        args: Sequence[str],
        cwd: Path | None = None,
        stage: str | None = None,
    ) -> StageResult:
        """Run a program to completion.

        Args:
            program: Executable to launch.
            args: Arguments, passed without shell interpretation.
            cwd: Working directory for the child.
            stage: Pipeline stage name, used in error details.

        Returns:
            StageResult of the successful invocation.

        Raises:
            StageExecutionError: If the program cannot be started or
                exits with a non-zero status.
        """
        command = [str(program), *args]
        echo_command(command)

        start_time = time.time()
        try:
            completed = subprocess.run(command, cwd=cwd, check=False)
        except OSError as e:
            raise StageExecutionError(
                f"Failed to execute {program}: {e}",
                stage=stage,
                program=str(program),
            ) from e

        duration = time.time() - start_time
        if completed.returncode != 0:
            raise StageExecutionError(
                f"{program} exited with a failure status",
                stage=stage,
                program=str(program),
                return_code=completed.returncode,
            )

        return StageResult(command=command, duration_seconds=duration)

"""Custom exception definitions for build-bpf."""

from typing import Any


class BuildBpfError(Exception):
    """Base exception for all build-bpf errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(BuildBpfError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)


class MetadataError(BuildBpfError):
    """Exception raised when package metadata cannot be obtained."""

    def __init__(
        self,
        message: str,
        manifest_path: str | None = None,
        workspace_root: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize metadata error.

        Args:
            message: Error message.
            manifest_path: Manifest the query was scoped to.
            workspace_root: Root of the workspace that was queried.
            details: Additional error details.
        """
        details = details or {}
        if manifest_path:
            details["manifest_path"] = manifest_path
        if workspace_root:
            details["workspace_root"] = workspace_root
        super().__init__(message, details)


class AmbiguousTargetError(BuildBpfError):
    """Exception raised when a package declares several cdylib targets."""

    def __init__(
        self,
        package_name: str,
        candidates: list[str],
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ambiguous target error.

        Args:
            package_name: Name of the root package.
            candidates: Every cdylib target name, in declaration order.
            details: Additional error details.
        """
        self.package_name = package_name
        self.candidates = list(candidates)
        details = details or {}
        details["candidates"] = self.candidates
        super().__init__(
            f"{package_name} crate contains multiple cdylib targets: {self.candidates}",
            details,
        )


class StageExecutionError(BuildBpfError):
    """Exception raised when an external pipeline stage fails."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        program: str | None = None,
        return_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize stage execution error.

        Args:
            message: Error message.
            stage: Pipeline stage that failed (build/strip/dump).
            program: Program that was executed.
            return_code: Exit code, or None if the program never started.
            details: Additional error details.
        """
        self.stage = stage
        self.return_code = return_code
        details = details or {}
        if stage:
            details["stage"] = stage
        if program:
            details["program"] = program
        if return_code is not None:
            details["return_code"] = return_code
        super().__init__(message, details)

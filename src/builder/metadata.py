"""Package metadata inspection.

Queries ``cargo metadata`` for the project and derives the facts the
build pipeline needs: the cdylib program to post-process, whether the
legacy ``program`` feature is declared, and where the compiled
artifact will land.
"""

import json
import subprocess
from pathlib import Path
from typing import Any

from src.core.exceptions.errors import AmbiguousTargetError, MetadataError
from src.core.logger.logger import get_logger
from src.models.build import PackageFacts

logger = get_logger(__name__)

MODULE_CRATE_TYPE = "cdylib"
LEGACY_PROGRAM_FEATURE = "program"
TARGET_TRIPLE = "bpfel-unknown-unknown"
BUILD_PROFILE = "release"


class CargoMetadataCommand:
    """Runs ``cargo metadata`` and returns the decoded JSON document."""

    def __init__(self, cargo: str = "cargo", manifest_path: Path | None = None) -> None:
        """Initialize the command.

        Args:
            cargo: Cargo executable.
            manifest_path: Optional Cargo.toml to scope the query to.
        """
        self.cargo = cargo
        self.manifest_path = manifest_path

    def build_command(self) -> list[str]:
        """Return the argv of the metadata query."""
        cmd = [self.cargo, "metadata", "--format-version", "1"]
        if self.manifest_path is not None:
            cmd.extend(["--manifest-path", str(self.manifest_path)])
        return cmd

    def exec(self) -> dict[str, Any]:
        """Execute the query.

        Raises:
            MetadataError: If cargo cannot run, fails, or prints invalid JSON.
        """
        cmd = self.build_command()
        manifest = str(self.manifest_path) if self.manifest_path else None
        logger.debug(f"Querying package metadata: {' '.join(cmd)}")

        try:
            completed = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise MetadataError(
                f"Failed to obtain package metadata: {e}",
                manifest_path=manifest,
            ) from e

        if completed.returncode != 0:
            raise MetadataError(
                f"Failed to obtain package metadata: {completed.stderr.strip()}",
                manifest_path=manifest,
            )

        try:
            metadata = json.loads(completed.stdout)
        except json.JSONDecodeError as e:
            raise MetadataError(
                f"Failed to obtain package metadata: invalid JSON ({e})",
                manifest_path=manifest,
            ) from e

        if not isinstance(metadata, dict):
            raise MetadataError(
                "Failed to obtain package metadata: unexpected document",
                manifest_path=manifest,
            )
        return metadata


def find_root_package(metadata: dict[str, Any]) -> dict[str, Any] | None:
    """Locate the root package in a metadata document.

    Uses ``resolve.root`` when the dependency graph is present, otherwise
    the package whose manifest sits at the workspace root.
    """
    packages = metadata.get("packages") or []
    resolve = metadata.get("resolve")

    if resolve:
        root_id = resolve.get("root")
        if root_id is None:
            return None
        return next((p for p in packages if p.get("id") == root_id), None)

    workspace_root = metadata.get("workspace_root")
    if not workspace_root:
        return None
    root_manifest = Path(workspace_root) / "Cargo.toml"
    for package in packages:
        if Path(package.get("manifest_path", "")) == root_manifest:
            return package
    return None


def module_targets(package: dict[str, Any]) -> list[str]:
    """Names of the package's cdylib targets, in declaration order."""
    return [
        target["name"]
        for target in package.get("targets") or []
        if MODULE_CRATE_TYPE in (target.get("crate_types") or [])
    ]


def facts_from_metadata(
    metadata: dict[str, Any],
    manifest_path: Path | None = None,
) -> PackageFacts:
    """Derive package facts from a decoded metadata document.

    Args:
        metadata: ``cargo metadata`` JSON document.
        manifest_path: Manifest the query was scoped to, for error reports.

    Returns:
        PackageFacts for the root package.

    Raises:
        MetadataError: If there is no root package.
        AmbiguousTargetError: If the root package has several cdylib targets.
    """
    workspace_root = metadata.get("workspace_root")
    root_package = find_root_package(metadata)
    if root_package is None:
        raise MetadataError(
            f"Workspace does not have a root package: {workspace_root}",
            manifest_path=str(manifest_path) if manifest_path else None,
            workspace_root=workspace_root,
        )

    name = root_package.get("name", "")
    candidates = module_targets(root_package)
    if len(candidates) > 1:
        raise AmbiguousTargetError(name, candidates)
    if not candidates:
        logger.info(f"Note: {name} crate does not contain a cdylib target")

    target_directory = metadata.get("target_directory")
    if not target_directory:
        raise MetadataError(
            "Package metadata does not name a target directory",
            workspace_root=workspace_root,
        )

    return PackageFacts(
        root_package_name=name,
        candidate_module_targets=tuple(candidates),
        legacy_feature_declared=LEGACY_PROGRAM_FEATURE in (root_package.get("features") or {}),
        package_directory=Path(root_package["manifest_path"]).parent,
        output_directory=Path(target_directory) / TARGET_TRIPLE / BUILD_PROFILE,
    )


class MetadataInspector:
    """Derives PackageFacts for the project being built."""

    def __init__(self, cargo: str = "cargo") -> None:
        """Initialize the inspector.

        Args:
            cargo: Cargo executable used for the metadata query.
        """
        self.cargo = cargo

    def inspect(self, manifest_path: Path | None = None) -> PackageFacts:
        """Query metadata and derive the root package's facts.

        Args:
            manifest_path: Optional Cargo.toml; defaults to the one cargo
                finds from the current directory.

        Returns:
            PackageFacts for the root package.
        """
        metadata = CargoMetadataCommand(self.cargo, manifest_path).exec()
        return facts_from_metadata(metadata, manifest_path)

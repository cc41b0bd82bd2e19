"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generator

import pytest

from src.models.build import Config, PackageFacts


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp()).resolve()
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sdk_dir(temp_dir: Path) -> Path:
    """Create an SDK tree with placeholder toolchain scripts.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path to the SDK root.
    """
    sdk = temp_dir / "sdk" / "bpf"
    (sdk / "rust").mkdir(parents=True)
    (sdk / "scripts").mkdir()
    for script in ("rust/xargo-build.sh", "scripts/strip.sh", "scripts/dump.sh"):
        (sdk / script).write_text("#!/bin/sh\nexit 0\n")
    return sdk


@pytest.fixture
def package_dir(temp_dir: Path) -> Path:
    """Directory holding a package manifest."""
    pkg = temp_dir / "foo"
    pkg.mkdir()
    (pkg / "Cargo.toml").write_text('[package]\nname = "foo"\nversion = "0.1.0"\n')
    return pkg


@pytest.fixture
def make_metadata(package_dir: Path) -> Callable[..., dict[str, Any]]:
    """Factory for ``cargo metadata`` documents with a single root package.

    Args:
        package_dir: Package directory fixture.

    Returns:
        Function building a metadata dict from target specs and features.
    """

    def _make(
        targets: list[tuple[str, list[str]]] | None = None,
        features: dict[str, list[str]] | None = None,
        name: str = "foo",
    ) -> dict[str, Any]:
        package_id = f"{name} 0.1.0 (path+file://{package_dir})"
        return {
            "packages": [
                {
                    "name": name,
                    "version": "0.1.0",
                    "id": package_id,
                    "manifest_path": str(package_dir / "Cargo.toml"),
                    "targets": [
                        {
                            "name": target_name,
                            "kind": kinds,
                            "crate_types": kinds,
                            "src_path": str(package_dir / "src" / "lib.rs"),
                        }
                        for target_name, kinds in (targets or [])
                    ],
                    "features": features or {},
                }
            ],
            "workspace_members": [package_id],
            "resolve": {"nodes": [], "root": package_id},
            "target_directory": str(package_dir / "target"),
            "workspace_root": str(package_dir),
            "version": 1,
        }

    return _make


@pytest.fixture
def sample_config(sdk_dir: Path) -> Config:
    """Resolved configuration with no optional flags."""
    return Config(sdk_path=sdk_dir)


@pytest.fixture
def sample_facts(package_dir: Path) -> PackageFacts:
    """Facts for package ``foo`` with one cdylib target ``foo-lib``."""
    return PackageFacts(
        root_package_name="foo",
        candidate_module_targets=("foo-lib",),
        package_directory=package_dir,
        output_directory=package_dir / "target" / "bpfel-unknown-unknown" / "release",
    )

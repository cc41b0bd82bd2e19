"""Resolution of command-line overrides into a build Config."""

import sys
from pathlib import Path

from src.core.config.settings import SdkSettings
from src.core.exceptions.errors import ConfigurationError
from src.models.build import BuildOverrides, Config

SDK_SUBDIR = Path("sdk") / "bpf"


def default_sdk_path(executable: str | None = None) -> Path:
    """Default SDK root: ``sdk/bpf`` next to the running executable.

    Args:
        executable: Path of the running program; ``sys.argv[0]`` if omitted.
    """
    exe = Path(executable or sys.argv[0]).resolve()
    return exe.parent / SDK_SUBDIR


class ConfigResolver:
    """Merges explicit overrides with settings and computed defaults."""

    def __init__(self, settings: SdkSettings | None = None) -> None:
        """Initialize the resolver.

        Args:
            settings: SDK settings supplying defaults below the CLI.
        """
        self.settings = settings or SdkSettings()

    def sdk_path_for(self, overrides: BuildOverrides) -> Path:
        """Uncanonicalized SDK path: override, then settings, then default."""
        return overrides.bpf_sdk or self.settings.path or default_sdk_path()

    def resolve(self, overrides: BuildOverrides) -> Config:
        """Produce the immutable Config for one run.

        Raises:
            ConfigurationError: If the SDK path does not exist.
        """
        sdk_path = self.sdk_path_for(overrides)
        try:
            canonical = sdk_path.resolve(strict=True)
        except OSError as e:
            raise ConfigurationError(
                f"BPF SDK path does not exist: {sdk_path}: {e}",
                config_key="bpf_sdk",
            ) from e

        return Config(
            sdk_path=canonical,
            dump_requested=overrides.dump,
            features=tuple(overrides.features),
            manifest_path=overrides.manifest_path,
            suppress_default_features=overrides.no_default_features,
            build_script=self.settings.build_script,
            strip_script=self.settings.strip_script,
            dump_script=self.settings.dump_script,
        )

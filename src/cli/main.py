"""Main CLI entry point for build-bpf."""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from src.builder import BuildPipeline, ConfigResolver, MetadataInspector
from src.cli.display import show_build_result, show_error
from src.core.config.settings import Settings
from src.core.exceptions.errors import (
    AmbiguousTargetError,
    BuildBpfError,
    ConfigurationError,
    MetadataError,
    StageExecutionError,
)
from src.core.logger.logger import setup_logging
from src.models.build import BuildOverrides

CARGO_SUBCOMMAND = "build-bpf"

ERROR_TITLES: dict[type[BuildBpfError], str] = {
    ConfigurationError: "Configuration Error",
    MetadataError: "Metadata Error",
    AmbiguousTargetError: "Ambiguous cdylib Targets",
    StageExecutionError: "Build Stage Failed",
}


def strip_cargo_subcommand(argv: list[str]) -> list[str]:
    """Drop the subcommand name cargo passes when run as ``cargo build-bpf``.

    Args:
        argv: Arguments after the program name.

    Returns:
        Arguments meant for this tool.
    """
    if argv and argv[0] == CARGO_SUBCOMMAND:
        return argv[1:]
    return list(argv)


def split_features(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated, space-separated ``--features`` values in order."""
    features: list[str] = []
    for value in values:
        features.extend(value.split())
    return features


def load_settings(config_file: Path | None, verbose: bool) -> Settings:
    """Load settings and apply the verbosity flag."""
    try:
        settings = Settings.load(config_file)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e}",
            config_key=str(config_file) if config_file else None,
        ) from e
    if verbose:
        settings.logging.level = "DEBUG"
    return settings


def handle_error(error: BuildBpfError) -> None:
    """Report a fatal error and terminate with status 1."""
    title = ERROR_TITLES.get(type(error), "Build Failed")
    show_error(title, error.message)
    sys.exit(1)


@click.command(name=CARGO_SUBCOMMAND)
@click.option(
    "--bpf-sdk",
    "bpf_sdk",
    type=click.Path(path_type=Path),
    metavar="PATH",
    help="Path to the Solana BPF SDK [default: <executable dir>/sdk/bpf]",
)
@click.option("--dump", is_flag=True, help="Dump ELF information to a text file on success")
@click.option(
    "--features",
    multiple=True,
    metavar="FEATURES",
    help="Space-separated list of features to activate",
)
@click.option(
    "--no-default-features",
    is_flag=True,
    help="Do not activate the `default` feature",
)
@click.option(
    "--manifest-path",
    type=click.Path(path_type=Path),
    metavar="PATH",
    help="Path to Cargo.toml",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--version", "-V", is_flag=True, help="Show version")
def main(
    bpf_sdk: Path | None,
    dump: bool,
    features: tuple[str, ...],
    no_default_features: bool,
    manifest_path: Path | None,
    config_file: Path | None,
    verbose: bool,
    version: bool,
) -> None:
    """Compile a Cargo package for the BPF target, then strip and dump it."""
    if version:
        from src import __version__

        click.echo(f"build-bpf version {__version__}")
        return

    overrides = BuildOverrides(
        bpf_sdk=bpf_sdk,
        dump=dump,
        features=split_features(features),
        manifest_path=manifest_path,
        no_default_features=no_default_features,
    )

    try:
        settings = load_settings(config_file, verbose)
        setup_logging(settings.logging)
        config = ConfigResolver(settings.sdk).resolve(overrides)
        pipeline = BuildPipeline(inspector=MetadataInspector(settings.sdk.cargo))
        report = pipeline.run(config)
    except BuildBpfError as e:
        handle_error(e)
        return

    show_build_result(report)


def run() -> None:
    """Console script entry point, usable directly or as a cargo subcommand."""
    main(args=strip_cargo_subcommand(sys.argv[1:]), prog_name="cargo-build-bpf")


if __name__ == "__main__":
    run()

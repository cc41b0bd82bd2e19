"""Application settings using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.config.loader import DEFAULT_CONFIG_PATH, ConfigLoader


class SdkSettings(BaseSettings):
    """BPF SDK and toolchain settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_BPF_SDK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    path: Path | None = Field(
        default=None,
        description="SDK root; computed from the executable location when unset",
    )
    build_script: str = Field(
        default="rust/xargo-build.sh",
        description="Toolchain build script, relative to the SDK root",
    )
    strip_script: str = Field(
        default="scripts/strip.sh",
        description="Strip script, relative to the SDK root",
    )
    dump_script: str = Field(
        default="scripts/dump.sh",
        description="Dump script, relative to the SDK root",
    )
    cargo: str = Field(
        default="cargo",
        description="Cargo executable used for metadata queries",
    )

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, v: object) -> object:
        """Treat an empty path as unset."""
        if v is None or v == "":
            return None
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_BPF_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="%(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: object) -> str:
        """Validate log level."""
        if not isinstance(v, str):
            raise ValueError(f"Invalid log level: {v!r}. Must be a level name")
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: object) -> object:
        """Treat an empty file name as unset."""
        if v is None or v == "":
            return None
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_BPF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sdk: SdkSettings = Field(default_factory=SdkSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            sdk=SdkSettings(**loader.section("sdk")),
            logging=LoggingSettings(**loader.section("logging")),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from an explicit file or the default locations.

        Priority: YAML file > environment variables > .env > defaults

        Args:
            path: Optional YAML file given on the command line.

        Returns:
            Settings instance.
        """
        if path is not None:
            return cls.from_yaml(path)

        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_yaml(DEFAULT_CONFIG_PATH)

        return cls()

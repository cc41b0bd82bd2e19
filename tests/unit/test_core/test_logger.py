"""Tests for the logging system."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from src.core.config.settings import LoggingSettings
from src.core.logger.logger import echo_command, get_logger, setup_logging


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogger:
    """Tests for logger setup and command echoes."""

    def test_get_logger_is_cached(self) -> None:
        """Test the same logger is returned for a name."""
        assert get_logger("src.builder.pipeline") is get_logger("src.builder.pipeline")

    @pytest.mark.usefixtures("restore_root_logger")
    def test_setup_logging_level(self) -> None:
        """Test the root level follows settings."""
        setup_logging(LoggingSettings(level="warning", use_rich=False))
        assert logging.getLogger().level == logging.WARNING

    @pytest.mark.usefixtures("restore_root_logger")
    def test_setup_logging_file(self, temp_dir: Path) -> None:
        """Test records are written to the configured file."""
        log_file = temp_dir / "logs" / "build-bpf.log"
        setup_logging(LoggingSettings(level="INFO", use_rich=False, file=log_file))

        get_logger("src.builder.pipeline").info("BPF SDK: /opt/sdk")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "BPF SDK: /opt/sdk" in log_file.read_text(encoding="utf-8")

    @pytest.mark.usefixtures("restore_root_logger")
    def test_echo_ignores_log_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test command echoes are shown with a quiet log level."""
        setup_logging(LoggingSettings(level="ERROR", use_rich=False))

        echo_command(["/sdk/scripts/strip.sh", "/out/prog.so", "prog.so"])

        assert "Running: /sdk/scripts/strip.sh /out/prog.so prog.so" in capsys.readouterr().out

    def test_echo_keeps_long_commands_on_one_line(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test long invocations are not wrapped."""
        args = [f"--features feature-{i}" for i in range(30)]
        echo_command(["/sdk/rust/xargo-build.sh", *args])

        out = capsys.readouterr().out
        assert out.count("\n") == 1
        assert out.startswith("Running: /sdk/rust/xargo-build.sh --features feature-0")

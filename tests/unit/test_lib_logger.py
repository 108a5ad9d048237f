"""Unit tests for logging configuration."""

import json
import logging
import sys
from pathlib import Path

import pytest

from src.core.config import SetupSettings
from src.core.lib_logger import (
    ROOT_LOGGER_NAME,
    StructuredFormatter,
    get_component_logger,
    setup_logging,
)


class TestConsoleLogging:

    def test_info_goes_to_stdout_and_errors_to_stderr(self, capsys):
        setup_logging(SetupSettings())
        logger = get_component_logger("test")

        logger.info("Checking prerequisites...")
        logger.error("Server directory not found!")

        captured = capsys.readouterr()
        assert captured.out == "[INFO] Checking prerequisites...\n"
        assert captured.err == "[ERROR] Server directory not found!\n"

    def test_debug_hidden_unless_enabled(self, capsys):
        setup_logging(SetupSettings())
        get_component_logger("test").debug("resolved node")
        assert capsys.readouterr().out == ""

        setup_logging(SetupSettings(debug=True))
        get_component_logger("test").debug("resolved node")
        out = capsys.readouterr().out
        assert "[DEBUG] shopsmart.test: resolved node" in out

    def test_reconfiguring_does_not_duplicate_handlers(self):
        setup_logging(SetupSettings())
        setup_logging(SetupSettings())
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 2

    def test_warnings_only_reach_stderr(self, capsys):
        setup_logging(SetupSettings(debug=True))
        get_component_logger("test").warning("node_modules missing after install")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[WARNING] shopsmart.test: node_modules missing after install" in captured.err

    def test_error_log_level_hides_info(self, capsys):
        setup_logging(SetupSettings(log_level="ERROR"))
        logger = get_component_logger("test")
        logger.info("Checking prerequisites...")
        logger.warning("Unknown environment")
        logger.error("Server directory not found!")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "[ERROR] Server directory not found!\n"

    def test_component_logger_carries_context(self):
        adapter = get_component_logger("installer", target="server")
        assert adapter.logger.name == "shopsmart.installer"
        assert adapter.extra == {"component": "installer", "target": "server"}
        assert adapter.with_context(step="sync").extra["step"] == "sync"


class TestFileLogging:

    def test_writes_structured_json(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "setup.log"
        setup_logging(SetupSettings(log_file=log_file))

        get_component_logger("installer").info("Installing server dependencies")

        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()
        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["level"] == "INFO"
        assert entry["logger"] == "shopsmart.installer"
        assert entry["message"] == "Installing server dependencies"
        assert entry["component"] == "installer"

    def test_unwritable_log_file_raises_os_error(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(OSError):
            setup_logging(SetupSettings(log_file=blocker / "setup.log"))

    def test_formatter_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.getLogger("x").makeRecord(
                "x", logging.ERROR, __file__, 1, "failed", None, exc_info=sys.exc_info()
            )

        entry = json.loads(StructuredFormatter().format(record))
        assert entry["message"] == "failed"
        assert "RuntimeError: boom" in entry["exception"]

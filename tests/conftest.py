"""Test configuration and fixtures for the setup tool tests."""

import io
import json
import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Generator, List, Tuple
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from rich.console import Console

from src.cli.utils.branding import SetupBranding
from src.core.config import SetupSettings
from src.core.lib_logger import ROOT_LOGGER_NAME

PACKAGE_JSON = {"name": "shopsmart", "version": "1.0.0", "dependencies": {"express": "^4.18.2"}}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch) -> None:
    """Keep SHOPSMART_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("SHOPSMART_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Detach console handlers bound to streams of a finished test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir).resolve()


@pytest.fixture
def project_root(temp_dir: Path) -> Path:
    """Create a project with server/ and client/ sub-projects."""
    for name in ("server", "client"):
        target = temp_dir / name
        target.mkdir()
        (target / "package.json").write_text(json.dumps(PACKAGE_JSON, indent=2))
        (target / "package-lock.json").write_text(json.dumps({"lockfileVersion": 3}))
    return temp_dir


@pytest.fixture
def settings(project_root: Path) -> SetupSettings:
    """Create settings pointing at the test project."""
    return SetupSettings(project_root=project_root)


@pytest.fixture
def branding() -> SetupBranding:
    """Banner renderer writing into in-memory buffers."""
    return SetupBranding(
        console=Console(file=io.StringIO(), width=100),
        error_console=Console(file=io.StringIO(), width=100)
    )


@pytest.fixture
def fake_toolchain() -> Generator[None, None, None]:
    """Pretend node and npm are installed."""
    with patch("src.logic.setup.services.prerequisites.shutil.which",
               side_effect=lambda name: f"/usr/bin/{name}"), \
         patch("src.logic.setup.services.prerequisites.PrerequisiteChecker._query_version",
               return_value="v20.11.0"):
        yield


@pytest.fixture
def fake_install() -> Generator[List[Tuple[List[str], Path]], None, None]:
    """Replace the install subprocess with one that creates node_modules.

    Yields the list of (command, cwd) pairs that were run.
    """
    calls: List[Tuple[List[str], Path]] = []

    def _run(command, cwd=None, **kwargs):
        calls.append((list(command), Path(cwd)))
        (Path(cwd) / "node_modules").mkdir(exist_ok=True)
        return subprocess.CompletedProcess(command, 0)

    with patch("src.logic.setup.services.installer.subprocess.run", side_effect=_run):
        yield calls


@pytest.fixture
def failing_install() -> Generator[List[Path], None, None]:
    """Replace the install subprocess with one that always fails."""
    calls: List[Path] = []

    def _run(command, cwd=None, **kwargs):
        calls.append(Path(cwd))
        return subprocess.CompletedProcess(command, 1)

    with patch("src.logic.setup.services.installer.subprocess.run", side_effect=_run):
        yield calls


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create CLI runner for testing Click commands."""
    return CliRunner()

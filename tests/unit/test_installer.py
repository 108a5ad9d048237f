"""Unit tests for the dependency installer and post-install verification."""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from src.core.config import SetupSettings
from src.lib.exceptions import (
    EXIT_INSTALL_FAILED,
    EXIT_MISSING_DIRECTORY,
    DependencyInstallError,
    MissingDirectoryError,
)
from src.logic.setup.services.freshness import FreshnessChecker
from src.logic.setup.services.installer import DependencyInstaller
from src.logic.setup.services.verifier import InstallVerifier
from src.models.target import Target, TargetKind


@pytest.fixture
def target(project_root: Path) -> Target:
    return Target(kind=TargetKind.CLIENT, directory=project_root / "client")


@pytest.fixture
def installer(settings: SetupSettings) -> DependencyInstaller:
    return DependencyInstaller(settings, FreshnessChecker(settings), package_manager_path="/usr/bin/npm")


class TestDependencyInstaller:

    def test_installs_stale_target(self, installer, target, fake_install):
        installed = installer.sync(target)

        assert installed is True
        assert fake_install == [(["/usr/bin/npm", "install"], target.directory)]
        assert installer.freshness.check(target).fresh is True

    def test_skips_fresh_target(self, installer, target, fake_install):
        installer.sync(target)
        fake_install.clear()

        installed = installer.sync(target)

        assert installed is False
        assert fake_install == []

    def test_reinstalls_after_manifest_change(self, installer, target, fake_install):
        installer.sync(target)
        target.manifest_path.write_text('{"name": "client", "dependencies": {"vite": "^5.0.0"}}')

        assert installer.sync(target) is True
        assert len(fake_install) == 2

    def test_failed_install_raises_error(self, installer, target, failing_install):
        with pytest.raises(DependencyInstallError) as exc_info:
            installer.sync(target)

        error = exc_info.value
        assert error.exit_code == EXIT_INSTALL_FAILED
        assert error.message == "Failed to install client dependencies"
        assert error.details == {"target": "client", "return_code": 1}
        assert not installer.freshness.marker_path(target).exists()

    def test_unlaunchable_package_manager_raises_error(self, installer, target):
        with patch("src.logic.setup.services.installer.subprocess.run",
                   side_effect=FileNotFoundError("npm")):
            with pytest.raises(DependencyInstallError):
                installer.sync(target)

    def test_missing_directory_raises_error(self, installer, target, fake_install):
        shutil.rmtree(target.directory)

        with pytest.raises(MissingDirectoryError) as exc_info:
            installer.sync(target)

        assert exc_info.value.exit_code == EXIT_MISSING_DIRECTORY
        assert exc_info.value.message == "Client directory not found!"
        assert fake_install == []

    def test_custom_install_args(self, project_root, target):
        settings = SetupSettings(project_root=project_root, package_manager="pnpm",
                                 install_args=["install", "--frozen-lockfile"])
        installer = DependencyInstaller(settings, FreshnessChecker(settings))

        assert installer.install_command() == ["pnpm", "install", "--frozen-lockfile"]

    def test_runs_without_shell(self, installer, target):
        with patch("src.logic.setup.services.installer.subprocess.run",
                   return_value=subprocess.CompletedProcess([], 0)) as mock_run:
            installer.sync(target)

        args, kwargs = mock_run.call_args
        assert args[0] == ["/usr/bin/npm", "install"]
        assert kwargs["cwd"] == str(target.directory)
        assert "shell" not in kwargs
        assert "timeout" not in kwargs


class TestInstallVerifier:

    def test_passes_when_all_dependencies_present(self, project_root):
        targets = [
            Target(kind=TargetKind.SERVER, directory=project_root / "server"),
            Target(kind=TargetKind.CLIENT, directory=project_root / "client"),
        ]
        for target in targets:
            target.dependencies_dir.mkdir()

        InstallVerifier().verify(targets)

    def test_missing_dependencies_raise_error(self, project_root):
        server = Target(kind=TargetKind.SERVER, directory=project_root / "server")
        client = Target(kind=TargetKind.CLIENT, directory=project_root / "client")
        server.dependencies_dir.mkdir()

        with pytest.raises(DependencyInstallError) as exc_info:
            InstallVerifier().verify([server, client])

        assert exc_info.value.exit_code == EXIT_INSTALL_FAILED
        assert exc_info.value.message == "Client node_modules missing!"

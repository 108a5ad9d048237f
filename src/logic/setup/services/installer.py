"""Dependency installation service."""

import subprocess
from typing import List, Optional

from src.core.config import SetupSettings
from src.core.lib_logger import get_component_logger
from src.lib.exceptions import DependencyInstallError, MissingDirectoryError
from src.logic.setup.services.freshness import FreshnessChecker
from src.models.target import Target

logger = get_component_logger("installer")


class DependencyInstaller:
    """Runs the package manager's install command for stale targets."""

    def __init__(self, settings: SetupSettings, freshness: FreshnessChecker,
                 package_manager_path: Optional[str] = None):
        """Initialize the installer.

        Args:
            settings: Setup settings
            freshness: Freshness checker used before and after installing
            package_manager_path: Resolved executable path, defaults to the bare command
        """
        self.settings = settings
        self.freshness = freshness
        self.package_manager_path = package_manager_path or settings.package_manager

    def install_command(self) -> List[str]:
        return [self.package_manager_path, *self.settings.install_args]

    def sync(self, target: Target) -> bool:
        """Install the target's dependencies if they are stale or absent.

        Returns:
            bool: True if an install ran, False if dependencies were up to date

        Raises:
            MissingDirectoryError: If the target directory does not exist
            DependencyInstallError: If the install command fails
        """
        if not target.directory.is_dir():
            raise MissingDirectoryError(
                f"{target.name.title()} directory not found!", path=target.directory
            )

        state = self.freshness.check(target)
        if state.fresh:
            logger.debug(f"{target.name}: {state.reason}")
            logger.info(f"{target.name.title()} dependencies are up to date.")
            return False

        if not target.manifest_path.is_file():
            logger.warning(f"{target.name} has no {target.manifest_name}")

        logger.info(f"Installing/Updating {target.name} dependencies...")
        logger.debug(f"{target.name}: {state.reason}")
        self._run_install(target)
        self.freshness.refresh(target)
        return True

    def _run_install(self, target: Target) -> None:
        command = self.install_command()
        logger.debug(f"Running {' '.join(command)} in {target.directory}")

        try:
            result = subprocess.run(command, cwd=str(target.directory), check=False)
        except OSError as e:
            raise DependencyInstallError(
                f"Failed to install {target.name} dependencies: {e}", target=target.name
            ) from e

        if result.returncode != 0:
            raise DependencyInstallError(
                f"Failed to install {target.name} dependencies",
                target=target.name,
                return_code=result.returncode
            )

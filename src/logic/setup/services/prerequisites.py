"""Prerequisite tooling checks.

Confirms the JavaScript runtime and package manager resolve on PATH and
queries their versions for the log. An optional minimum runtime version is
compared with ``packaging.version``.
"""

import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

from packaging import version

from src.core.config import SetupSettings
from src.core.lib_logger import get_component_logger
from src.lib.exceptions import MissingPrerequisiteError

logger = get_component_logger("prerequisites")

DISPLAY_NAMES = {
    "node": "Node.js",
    "npm": "npm",
    "pnpm": "pnpm",
    "yarn": "Yarn",
    "bun": "Bun",
}


@dataclass(frozen=True)
class ToolInfo:
    """A resolved executable."""

    command: str
    path: str
    version: Optional[str]

    @property
    def display_version(self) -> str:
        return self.version or "unknown"


@dataclass(frozen=True)
class Prerequisites:
    runtime: ToolInfo
    package_manager: ToolInfo


class PrerequisiteChecker:
    """Service for checking required executables."""

    def __init__(self, settings: SetupSettings):
        self.settings = settings

    def check(self) -> Prerequisites:
        """Check runtime and package manager, runtime first.

        Returns:
            Prerequisites: Resolved tools with their versions

        Raises:
            MissingPrerequisiteError: If a tool is missing or the runtime is too old
        """
        runtime = self.resolve(self.settings.runtime_command)
        package_manager = self.resolve(self.settings.package_manager)

        if self.settings.minimum_runtime_version:
            self._check_minimum_version(runtime, self.settings.minimum_runtime_version)

        return Prerequisites(runtime=runtime, package_manager=package_manager)

    def resolve(self, command: str) -> ToolInfo:
        """Resolve one executable on PATH and query its version.

        Raises:
            MissingPrerequisiteError: If the executable is not on PATH
        """
        path = shutil.which(command)
        if path is None:
            raise MissingPrerequisiteError.not_installed(display_name(command), command)

        tool = ToolInfo(command=command, path=path, version=self._query_version(path))
        logger.debug(f"Resolved {command} at {path} (version {tool.display_version})")
        return tool

    def _query_version(self, executable: str) -> Optional[str]:
        """Run ``<executable> --version`` and return its first output line.

        Returns:
            Optional[str]: Version string, or None if it could not be determined
        """
        try:
            result = subprocess.run(
                [executable, "--version"],
                capture_output=True,
                text=True
            )
        except OSError as e:
            logger.warning(f"Could not query version of {executable}: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"Version query failed for {executable}: {result.stderr.strip()}")
            return None

        output = result.stdout.strip()
        return output.splitlines()[0] if output else None

    def _check_minimum_version(self, tool: ToolInfo, required: str) -> None:
        """Compare the tool version against a minimum.

        A version that cannot be parsed is treated as too old.
        """
        name = display_name(tool.command)
        try:
            found = version.Version(tool.display_version.lstrip("v"))
        except version.InvalidVersion:
            raise MissingPrerequisiteError.version_too_old(
                name, tool.command, tool.display_version, required
            )

        if found < version.Version(required.lstrip("v")):
            raise MissingPrerequisiteError.version_too_old(
                name, tool.command, tool.display_version, required
            )


def display_name(command: str) -> str:
    """Get a human readable name for an executable."""
    return DISPLAY_NAMES.get(command, command)

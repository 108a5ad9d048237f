"""Dependency freshness checks and marker refresh."""

import hashlib
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from src.core.config import FreshnessStrategy, SetupSettings
from src.core.lib_logger import get_component_logger
from src.models.dependency_state import DependencyState, InstallMarker
from src.models.target import Target

logger = get_component_logger("freshness")


def compute_manifest_digest(target: Target) -> str:
    """Hash the manifest and, when present, the lock file.

    A missing manifest hashes as empty content.
    """
    digest = hashlib.sha256()
    for path in (target.manifest_path, target.lock_path):
        digest.update(path.name.encode("utf-8"))
        digest.update(b"\0")
        if path.is_file():
            digest.update(path.read_bytes())
        digest.update(b"\0")
    return digest.hexdigest()


class FreshnessChecker:
    """Decides whether a target's installed dependencies are current."""

    def __init__(self, settings: SetupSettings, strategy: Optional[FreshnessStrategy] = None):
        self.settings = settings
        self.strategy = strategy or settings.freshness_strategy

    def marker_path(self, target: Target) -> Path:
        return target.dependencies_dir / self.settings.marker_name

    def check(self, target: Target) -> DependencyState:
        """Get the dependency state of a target."""
        if not target.dependencies_dir.is_dir():
            return DependencyState(
                target=target.name,
                installed=False,
                fresh=False,
                reason=f"{target.dependencies_dir_name} is missing"
            )

        if self.strategy == FreshnessStrategy.MTIME:
            return self._check_mtime(target)
        return self._check_hash(target)

    def _check_mtime(self, target: Target) -> DependencyState:
        installed_at = target.dependencies_dir.stat().st_mtime

        for path in (target.manifest_path, target.lock_path):
            if path.is_file() and path.stat().st_mtime > installed_at:
                return DependencyState(
                    target=target.name,
                    installed=True,
                    fresh=False,
                    reason=f"{path.name} is newer than {target.dependencies_dir_name}"
                )

        return DependencyState(
            target=target.name,
            installed=True,
            fresh=True,
            reason=f"{target.dependencies_dir_name} is newer than the manifest"
        )

    def _check_hash(self, target: Target) -> DependencyState:
        marker = self.read_marker(target)
        if marker is None:
            return DependencyState(
                target=target.name,
                installed=True,
                fresh=False,
                reason="no install marker recorded"
            )

        if marker.manifest_digest != compute_manifest_digest(target):
            return DependencyState(
                target=target.name,
                installed=True,
                fresh=False,
                reason="manifest changed since last install"
            )

        return DependencyState(
            target=target.name,
            installed=True,
            fresh=True,
            reason=f"manifest unchanged since {marker.installed_at.isoformat()}"
        )

    def read_marker(self, target: Target) -> Optional[InstallMarker]:
        """Load the install marker, treating an unreadable one as absent."""
        path = self.marker_path(target)
        if not path.is_file():
            return None

        try:
            return InstallMarker.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable install marker {path}: {e}")
            return None

    def refresh(self, target: Target) -> bool:
        """Record a completed install for the target.

        Writes the marker and touches the dependencies directory so both
        strategies see the install as current.

        Returns:
            bool: False if there is no dependencies directory to mark
        """
        if not target.dependencies_dir.is_dir():
            logger.warning(
                f"{target.name} install finished without creating {target.dependencies_dir_name}"
            )
            return False

        marker = InstallMarker(
            manifest_digest=compute_manifest_digest(target),
            package_manager=self.settings.package_manager
        )
        self.marker_path(target).write_text(marker.model_dump_json(indent=2), encoding="utf-8")
        os.utime(target.dependencies_dir)
        logger.debug(f"Refreshed install marker for {target.name}")
        return True

"""Post-install verification service."""

from typing import Iterable

from src.core.lib_logger import get_component_logger
from src.lib.exceptions import DependencyInstallError
from src.models.target import Target

logger = get_component_logger("verifier")


class InstallVerifier:
    """Confirms every target ended up with a dependencies directory."""

    def verify(self, targets: Iterable[Target]) -> None:
        """Check each target in order.

        Raises:
            DependencyInstallError: On the first target without dependencies
        """
        for target in targets:
            if not target.dependencies_dir.is_dir():
                raise DependencyInstallError(
                    f"{target.name.title()} {target.dependencies_dir_name} missing!",
                    target=target.name
                )
            logger.debug(f"{target.name}: {target.dependencies_dir} present")

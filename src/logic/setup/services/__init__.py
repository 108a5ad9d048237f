"""Setup services for prerequisites, env files, dependencies and verification."""

from src.logic.setup.services.env_writer import EnvFileWriter
from src.logic.setup.services.freshness import FreshnessChecker
from src.logic.setup.services.installer import DependencyInstaller
from src.logic.setup.services.prerequisites import PrerequisiteChecker
from src.logic.setup.services.verifier import InstallVerifier

__all__ = [
    "PrerequisiteChecker",
    "EnvFileWriter",
    "FreshnessChecker",
    "DependencyInstaller",
    "InstallVerifier",
]

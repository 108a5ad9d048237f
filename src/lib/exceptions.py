"""Exception hierarchy for setup failures and their process exit codes."""

from pathlib import Path
from typing import Any, Dict, Optional

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_MISSING_DIRECTORY = 2
EXIT_INSTALL_FAILED = 3
EXIT_INTERRUPTED = 130


class SetupError(Exception):
    """Base exception for all setup errors."""

    exit_code: int = EXIT_GENERAL_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize setup error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for reports."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "exit_code": self.exit_code,
            "details": self.details
        }


class InvalidArgumentError(SetupError):
    """Raised when command line arguments or settings are invalid."""

    def __init__(self, message: str, argument: Optional[str] = None):
        details = {"argument": argument} if argument else {}
        super().__init__(message, details)


class MissingPrerequisiteError(SetupError):
    """Raised when a required executable is missing or too old."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        found_version: Optional[str] = None,
        required_version: Optional[str] = None
    ):
        """Initialize missing prerequisite error."""
        details = {}
        if command:
            details["command"] = command
        if found_version:
            details["found_version"] = found_version
        if required_version:
            details["required_version"] = required_version

        super().__init__(message, details)

    @classmethod
    def not_installed(cls, display_name: str, command: str) -> "MissingPrerequisiteError":
        """Create error for an executable that is not on PATH."""
        return cls(
            f"{display_name} is not installed. Please install {display_name} to continue.",
            command=command
        )

    @classmethod
    def version_too_old(
        cls,
        display_name: str,
        command: str,
        found_version: str,
        required_version: str
    ) -> "MissingPrerequisiteError":
        """Create error for an executable below the minimum version."""
        return cls(
            f"{display_name} {found_version} is too old. "
            f"Version {required_version} or newer is required.",
            command=command,
            found_version=found_version,
            required_version=required_version
        )


class MissingDirectoryError(SetupError):
    """Raised when an expected project directory does not exist."""

    exit_code = EXIT_MISSING_DIRECTORY

    def __init__(self, message: str, path: Optional[Path] = None):
        details = {"path": str(path)} if path else {}
        super().__init__(message, details)


class DependencyInstallError(SetupError):
    """Raised when dependency installation fails or leaves nothing installed."""

    exit_code = EXIT_INSTALL_FAILED

    def __init__(
        self,
        message: str,
        target: Optional[str] = None,
        return_code: Optional[int] = None
    ):
        """Initialize dependency install error."""
        details: Dict[str, Any] = {}
        if target:
            details["target"] = target
        if return_code is not None:
            details["return_code"] = return_code

        super().__init__(message, details)

"""Setup tool utility library."""

from .exceptions import (
    DependencyInstallError,
    InvalidArgumentError,
    MissingDirectoryError,
    MissingPrerequisiteError,
    SetupError,
)

__all__ = [
    'SetupError',
    'InvalidArgumentError',
    'MissingPrerequisiteError',
    'MissingDirectoryError',
    'DependencyInstallError',
]

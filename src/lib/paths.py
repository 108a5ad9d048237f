"""
Project path utilities for the setup tool.
"""

from pathlib import Path

SETTINGS_FILE_NAME = "shopsmart-setup.yaml"


def get_settings_file_path(project_root: Path) -> Path:
    """Get path to the project settings file."""
    return project_root / SETTINGS_FILE_NAME


def display_path(path: Path, project_root: Path) -> str:
    """Render a path relative to the project root when possible."""
    try:
        return path.relative_to(project_root).as_posix()
    except ValueError:
        return str(path)

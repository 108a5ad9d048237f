"""Unified configuration management for the ShopSmart setup tool."""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from packaging import version
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.lib.paths import get_settings_file_path
from src.lib.yaml_utils import load_yaml_file


class FreshnessStrategy(str, Enum):
    """How dependency freshness is decided."""
    HASH = "hash"    # digest of manifest + lock recorded at install time
    MTIME = "mtime"  # dependencies directory newer than manifest + lock


class SetupSettings(BaseSettings):
    """Setup tool configuration with environment variable support."""

    # Application settings
    debug: bool = Field(default=False)
    project_root: Optional[Path] = Field(default=None)

    # Toolchain
    runtime_command: str = Field(default="node")
    package_manager: str = Field(default="npm")
    install_args: list[str] = Field(default_factory=lambda: ["install"])
    minimum_runtime_version: Optional[str] = Field(default=None)

    # Target layout
    server_dir: str = Field(default="server")
    client_dir: str = Field(default="client")
    dependencies_dir: str = Field(default="node_modules")
    manifest_name: str = Field(default="package.json")
    lock_name: str = Field(default="package-lock.json")
    marker_name: str = Field(default=".shopsmart-install.json")

    # Dependency freshness
    freshness_strategy: FreshnessStrategy = Field(default=FreshnessStrategy.HASH)

    # Logging configuration
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="SHOPSMART_",
        validate_assignment=True
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of: {sorted(allowed)}")
        return v.upper()

    @field_validator("minimum_runtime_version")
    @classmethod
    def validate_minimum_runtime_version(cls, v: Optional[str]) -> Optional[str]:
        """Validate minimum runtime version format if provided."""
        if v is not None:
            try:
                version.Version(v.lstrip("v"))
            except version.InvalidVersion:
                raise ValueError("minimum_runtime_version must be a valid version")
        return v

    @field_validator("install_args")
    @classmethod
    def validate_install_args(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("install_args cannot be empty")
        return v

    @property
    def target_dirs(self) -> Dict[str, str]:
        """Get target name to directory mapping in setup order."""
        return {"server": self.server_dir, "client": self.client_dir}

    def resolve_project_root(self, override: Optional[Path] = None) -> Path:
        """Resolve the project root from an override, settings or the CWD."""
        root = override or self.project_root or Path.cwd()
        return Path(root).expanduser().resolve()


def load_settings(
    config_file: Optional[Path] = None,
    project_root: Optional[Path] = None,
    **overrides: Any
) -> SetupSettings:
    """Build settings from an optional YAML file plus explicit overrides.

    Precedence is overrides > YAML file > SHOPSMART_* environment > defaults.
    Without an explicit ``config_file`` the project root's settings file is
    used when present.

    Raises:
        ValueError: If an explicit config file is missing or does not hold a mapping
    """
    if config_file is not None and not config_file.exists():
        raise ValueError(f"Settings file {config_file} not found")
    if config_file is None:
        root = project_root or Path.cwd()
        config_file = get_settings_file_path(root)

    file_values = load_yaml_file(config_file) or {}
    if not isinstance(file_values, dict):
        raise ValueError(f"Settings file {config_file} must contain a mapping")

    values = {**file_values, **{k: v for k, v in overrides.items() if v is not None}}
    if project_root is not None:
        values["project_root"] = project_root
    return SetupSettings(**values)

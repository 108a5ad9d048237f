"""Managed sub-projects (targets) and the environment files written for them."""

from enum import Enum
from pathlib import Path
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from src.models.run_config import RunConfig


class TargetKind(str, Enum):
    """The two managed sub-projects."""

    SERVER = "server"
    CLIENT = "client"


TARGET_LABELS = {
    TargetKind.SERVER: "Backend (Server)",
    TargetKind.CLIENT: "Frontend (Client)",
}


class EnvFile(BaseModel):
    """A KEY=VALUE environment file destined for a fixed path."""

    path: Path = Field(..., description="Absolute path of the file")
    entries: Dict[str, str] = Field(default_factory=dict, description="Ordered key/value pairs")

    def render(self) -> str:
        """Render entries as file contents, one assignment per line."""
        return "".join(f"{key}={value}\n" for key, value in self.entries.items())


class Target(BaseModel):
    """A sub-project whose environment and dependencies are managed."""

    model_config = ConfigDict(frozen=True)

    kind: TargetKind
    directory: Path = Field(..., description="Absolute path of the sub-project")
    dependencies_dir_name: str = Field(default="node_modules")
    manifest_name: str = Field(default="package.json")
    lock_name: str = Field(default="package-lock.json")

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def label(self) -> str:
        return TARGET_LABELS[self.kind]

    @property
    def env_path(self) -> Path:
        return self.directory / ".env"

    @property
    def dependencies_dir(self) -> Path:
        return self.directory / self.dependencies_dir_name

    @property
    def manifest_path(self) -> Path:
        return self.directory / self.manifest_name

    @property
    def lock_path(self) -> Path:
        return self.directory / self.lock_name

    def build_env_file(self, run_config: RunConfig) -> EnvFile:
        """Build this target's environment file from the run configuration."""
        if self.kind is TargetKind.SERVER:
            entries = {
                "NODE_ENV": run_config.environment,
                "PORT": str(run_config.server_port),
                "CLIENT_URL": run_config.client_url,
            }
        else:
            entries = {
                "VITE_API_URL": run_config.server_url,
                "VITE_ENV": run_config.environment,
            }
        return EnvFile(path=self.env_path, entries=entries)

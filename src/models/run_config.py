"""Run configuration model built from the positional command line arguments."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ENVIRONMENT = "development"
DEFAULT_SERVER_PORT = 5001
DEFAULT_CLIENT_PORT = 5173

KNOWN_ENVIRONMENTS = ("development", "staging", "production")

_ENVIRONMENT_PATTERN = re.compile(r"[A-Za-z0-9._-]+")


class RunConfig(BaseModel):
    """Environment name and ports for one setup run."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, description="Target environment name")
    server_port: int = Field(default=DEFAULT_SERVER_PORT, ge=1, le=65535, description="Backend server port")
    client_port: int = Field(default=DEFAULT_CLIENT_PORT, ge=1, le=65535, description="Frontend dev server port")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Environment must be a single token usable as a .env value."""
        if not _ENVIRONMENT_PATTERN.fullmatch(v):
            raise ValueError(
                "environment may only contain letters, digits, '.', '_' and '-'"
            )
        return v

    @classmethod
    def from_args(
        cls,
        environment: Optional[str] = None,
        server_port: Optional[str] = None,
        client_port: Optional[str] = None
    ) -> "RunConfig":
        """Build from raw positional arguments, applying defaults for omitted ones.

        Empty strings count as omitted, so ``run "" 5002`` keeps the default
        environment.

        Raises:
            pydantic.ValidationError: If a value is invalid
        """
        values = {
            "environment": environment,
            "server_port": server_port,
            "client_port": client_port,
        }
        return cls(**{k: v for k, v in values.items() if v not in (None, "")})

    @property
    def is_known_environment(self) -> bool:
        """Check if the environment is one of the documented ones."""
        return self.environment in KNOWN_ENVIRONMENTS

    @property
    def server_url(self) -> str:
        return f"http://localhost:{self.server_port}"

    @property
    def client_url(self) -> str:
        return f"http://localhost:{self.client_port}"

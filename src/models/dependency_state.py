"""Dependency freshness models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class InstallMarker(BaseModel):
    """Record written inside the dependencies directory after an install."""

    model_config = ConfigDict(
        str_strip_whitespace=True
    )

    manifest_digest: str = Field(..., min_length=64, max_length=64, description="sha256 of manifest + lock")
    installed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When dependencies were installed (UTC)"
    )
    package_manager: str = Field(..., description="Package manager command used")


class DependencyState(BaseModel):
    """Freshness verdict for one target's installed dependencies."""

    target: str
    installed: bool = Field(..., description="Whether the dependencies directory exists")
    fresh: bool = Field(..., description="Whether an install can be skipped")
    reason: str = Field(..., description="Why dependencies are fresh or stale")

    @property
    def needs_install(self) -> bool:
        return not self.fresh

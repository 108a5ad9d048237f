"""Setup step records and the overall run report."""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.models.run_config import RunConfig


class SetupStep(str, Enum):
    """Ordered steps of a setup run."""

    PREREQUISITES = "prerequisites"
    ENV_FILES = "env_files"
    SERVER_DEPENDENCIES = "server_dependencies"
    CLIENT_DEPENDENCIES = "client_dependencies"
    VERIFICATION = "verification"


class StepStatus(str, Enum):
    """Status of a setup step."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    StepStatus.PENDING: [StepStatus.IN_PROGRESS],
    StepStatus.IN_PROGRESS: [
        StepStatus.COMPLETED,
        StepStatus.SKIPPED,
        StepStatus.FAILED
    ],
    StepStatus.COMPLETED: [],  # Terminal state
    StepStatus.SKIPPED: [],  # Terminal state
    StepStatus.FAILED: [],  # Terminal state
}


class StepRecord(BaseModel):
    """Outcome of one setup step."""

    step: SetupStep
    status: StepStatus = Field(default=StepStatus.PENDING)
    detail: Optional[str] = Field(default=None, description="Human readable outcome")
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def transition_to(self, new_status: StepStatus, detail: Optional[str] = None) -> None:
        """Transition to a new status with validation."""
        if new_status not in _VALID_TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid transition from {self.status.value} to {new_status.value}"
            )

        now = datetime.now(timezone.utc)
        if new_status == StepStatus.IN_PROGRESS:
            self.started_at = now
        else:
            self.finished_at = now

        self.status = new_status
        if detail:
            self.detail = detail

    def is_terminal(self) -> bool:
        """Check if step is in a terminal state."""
        return not _VALID_TRANSITIONS[self.status]


class SetupReport(BaseModel):
    """Everything that happened during one setup run."""

    run_config: RunConfig
    project_root: Path
    steps: List[StepRecord] = Field(
        default_factory=lambda: [StepRecord(step=step) for step in SetupStep]
    )
    exit_code: Optional[int] = Field(default=None, description="Process exit code once finished")
    error: Optional[Dict[str, Any]] = Field(default=None, description="Serialized SetupError")

    def record(self, step: SetupStep) -> StepRecord:
        """Get the record for a step."""
        for record in self.steps:
            if record.step == step:
                return record
        raise KeyError(step)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def failed_step(self) -> Optional[SetupStep]:
        """Get the step that failed, if any."""
        for record in self.steps:
            if record.status == StepStatus.FAILED:
                return record.step
        return None

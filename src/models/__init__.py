"""Data models for the setup tool."""

from .dependency_state import DependencyState, InstallMarker
from .run_config import KNOWN_ENVIRONMENTS, RunConfig
from .setup_report import SetupReport, SetupStep, StepRecord, StepStatus
from .target import EnvFile, Target, TargetKind

__all__ = [
    "RunConfig",
    "KNOWN_ENVIRONMENTS",
    "Target",
    "TargetKind",
    "EnvFile",
    "DependencyState",
    "InstallMarker",
    "SetupReport",
    "SetupStep",
    "StepRecord",
    "StepStatus",
]

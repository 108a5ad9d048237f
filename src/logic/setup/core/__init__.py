"""Core setup components."""

from src.logic.setup.core.orchestrator import SetupOrchestrator

__all__ = [
    "SetupOrchestrator",
]

"""Setup logic for bootstrapping the development environment."""

from src.logic.setup.core.orchestrator import SetupOrchestrator

__all__ = [
    "SetupOrchestrator",
]

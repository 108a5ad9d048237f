"""CLI utilities package."""

from .branding import SetupBranding

__all__ = [
    "SetupBranding",
]

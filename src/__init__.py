# ShopSmart - Development Environment Setup

# Import subpackages to ensure they are discovered by the build system
from . import cli, lib, models

__all__ = ["cli", "lib", "models"]

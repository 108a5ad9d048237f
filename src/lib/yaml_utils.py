"""
YAML serialization/deserialization utilities.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def load_yaml_file(file_path: Path) -> Optional[Dict[str, Any]]:
    """Load YAML file safely.

    Returns None when the file does not exist.

    Raises:
        ValueError: If the file cannot be parsed
    """
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error loading YAML from {file_path}: {e}") from e

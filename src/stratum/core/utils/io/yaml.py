"""YAML reading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml(
    path: Path, default: Any = None, raise_on_error: bool = False
) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or invalid (default: None)
        raise_on_error: If True, propagate exceptions instead of returning default.

    Returns:
        Any: Parsed YAML data, or default if error

    Examples:
        >>> rules = read_yaml(Path("layers.yaml"), default={})
        >>> assert isinstance(rules, dict)
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def parse_yaml_string(content: str, default: Any = None) -> Any:
    """Parse YAML from string with error handling.

    Args:
        content: YAML string content
        default: Value to return on error (default: None)

    Returns:
        Parsed data or default
    """
    try:
        data = yaml.safe_load(content)
        return data if data is not None else default
    except yaml.YAMLError:
        return default


__all__ = [
    "read_yaml",
    "parse_yaml_string",
]

"""I/O utilities for Stratum."""
from __future__ import annotations

from .yaml import (
    parse_yaml_string,
    read_yaml,
)

__all__ = [
    "parse_yaml_string",
    "read_yaml",
]

"""Schema validation utilities for Stratum.

This module provides centralized JSON schema loading and validation
for configuration payloads.
"""
from __future__ import annotations

from .validation import (
    load_schema,
    validate_payload,
    validate_payload_safe,
    SchemaValidationError,
)

__all__ = [
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
    "SchemaValidationError",
]

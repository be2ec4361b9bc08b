"""Shared schema validation utilities.

Stratum validates structured YAML payloads (rule set documents) using JSON
Schema. Schemas are stored as YAML files under ``stratum.data/schemas`` and
loaded in a single, consistent way across the codebase.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Mapping

import jsonschema
from jsonschema import Draft202012Validator

from stratum.core.exceptions import StratumError
from stratum.core.utils.io import read_yaml
from stratum.data import get_data_path


class SchemaValidationError(StratumError, ValueError):
    """Raised when schema validation fails."""

    def __init__(
        self,
        message: str,
        *,
        schema: str | None = None,
        errors: List[str] | None = None,
    ) -> None:
        ctx: Dict[str, Any] = {}
        if schema:
            ctx["schema"] = schema
        if errors:
            ctx["errors"] = list(errors)
        self.errors = list(errors or [])
        StratumError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


def _normalize_schema_name(schema_name: str) -> str:
    lowered = schema_name.lower()
    if lowered.endswith(".json"):
        raise ValueError(
            f"JSON schemas are not supported: {schema_name}. "
            "Use YAML schemas (e.g., *.schema.yaml)."
        )
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        return f"{schema_name}.yaml"
    return schema_name


@lru_cache(maxsize=16)
def _load_schema_cached(schema_name: str) -> Dict[str, Any]:
    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}\nSearched:\n- {schema_path.parent}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    Draft202012Validator.check_schema(schema)
    return schema


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Canonical schema serialization format is YAML (JSON Schema expressed in YAML).
    Automatically appends ``.yaml`` if no extension is present.

    Args:
        schema_name: Schema file name under the bundled schemas directory
            (e.g., "layer-rules.schema").

    Returns:
        Parsed schema dictionary.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    return dict(_load_schema_cached(_normalize_schema_name(schema_name)))


def _iter_error_messages(payload: Any, schema: Mapping[str, Any]) -> List[str]:
    validator = Draft202012Validator(schema)
    messages: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            messages.append(f"{path_str}: {error.message}")
        else:
            messages.append(error.message)
    return messages


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
        FileNotFoundError: If schema doesn't exist.
    """
    schema = load_schema(schema_name)
    try:
        jsonschema.validate(instance=payload, schema=schema, cls=Draft202012Validator)
    except jsonschema.ValidationError as exc:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': {exc.message}",
            schema=schema_name,
            errors=_iter_error_messages(payload, schema),
        ) from exc


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return list of error messages (empty if valid).

    This is a safe variant that returns errors instead of raising exceptions,
    useful for collecting multiple validation errors.
    """
    try:
        schema = load_schema(schema_name)
    except (FileNotFoundError, ValueError, jsonschema.SchemaError) as e:
        return [f"Schema loading failed: {e}"]

    return _iter_error_messages(payload, schema)

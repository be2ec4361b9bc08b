"""Layer rule set documents.

A rule set is usually kept in YAML next to the rest of an application's
configuration::

    rules:
      - [background, content]
      - lower: content
        upper: modal
    sizes:
      content: 3
    baseIndices:
      background: 10

Documents are validated against the bundled ``layer-rules.schema.yaml``
before they are turned into a :class:`LayerRuleSet`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

import yaml

from stratum.core.exceptions import RuleSetConfigError
from stratum.core.layers import LayerProvider, compile_layers_safe
from stratum.core.result import Result
from stratum.core.schemas import validate_payload
from stratum.core.utils.io import parse_yaml_string, read_yaml

logger = logging.getLogger(__name__)

RULE_SET_SCHEMA = "layer-rules.schema"


@dataclass(frozen=True)
class LayerRuleSet:
    """Rules plus the optional per-layer overrides they compile with."""

    rules: Tuple[Tuple[str, str], ...]
    sizes: Mapping[str, int] = field(default_factory=dict)
    base_indices: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple((lower, upper) for lower, upper in self.rules))
        object.__setattr__(self, "sizes", MappingProxyType(dict(self.sizes)))
        object.__setattr__(self, "base_indices", MappingProxyType(dict(self.base_indices)))

    def __hash__(self) -> int:
        return hash((self.rules, frozenset(self.sizes.items()), frozenset(self.base_indices.items())))

    def compile_safe(self) -> Result[LayerProvider[str]]:
        return compile_layers_safe(self.rules, self.sizes, self.base_indices)

    def compile(self) -> LayerProvider[str]:
        """Compile the rule set, raising ``RuleConflictError`` on loops."""
        return self.compile_safe().unwrap()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rules": [list(rule) for rule in self.rules],
            "sizes": dict(self.sizes),
            "baseIndices": dict(self.base_indices),
        }


def _parse_rule(raw: Any) -> Tuple[str, str]:
    if isinstance(raw, Mapping):
        return str(raw["lower"]), str(raw["upper"])
    lower, upper = raw
    return str(lower), str(upper)


def rule_set_from_mapping(data: Mapping[str, Any]) -> LayerRuleSet:
    """Build a :class:`LayerRuleSet` from a parsed document.

    Raises:
        SchemaValidationError: ``data`` does not match the rule set schema.
    """
    validate_payload(data, RULE_SET_SCHEMA)

    rules: List[Tuple[str, str]] = [_parse_rule(raw) for raw in data.get("rules") or []]
    sizes = {str(k): int(v) for k, v in (data.get("sizes") or {}).items()}
    base_indices = {str(k): int(v) for k, v in (data.get("baseIndices") or {}).items()}
    return LayerRuleSet(rules=tuple(rules), sizes=sizes, base_indices=base_indices)


def _require_mapping(data: Any, source: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        kind = type(data).__name__ if data is not None else "empty document"
        raise RuleSetConfigError(f"Rule set must be a YAML mapping, got {kind}: {source}", path=source)
    return data


def rule_set_from_string(content: str, *, source: str = "<string>") -> LayerRuleSet:
    """Parse and validate a YAML rule set held in memory.

    Unparseable YAML is reported like an empty document.

    Raises:
        RuleSetConfigError: The content is not a YAML mapping.
        SchemaValidationError: The document does not match the schema.
    """
    data = parse_yaml_string(content, default=None)
    return rule_set_from_mapping(_require_mapping(data, source))


def load_rule_set(path: Path) -> LayerRuleSet:
    """Read and validate a YAML rule set document.

    Raises:
        RuleSetConfigError: The file is missing or is not a YAML mapping.
        SchemaValidationError: The document does not match the schema.
    """
    path = Path(path)
    try:
        data = read_yaml(path, default=None, raise_on_error=True)
    except FileNotFoundError as exc:
        raise RuleSetConfigError(f"Rule set not found: {path}", path=str(path)) from exc
    except (OSError, yaml.YAMLError) as exc:
        raise RuleSetConfigError(f"Rule set could not be parsed: {path}: {exc}", path=str(path)) from exc

    rule_set = rule_set_from_mapping(_require_mapping(data, str(path)))
    logger.debug("Loaded %d layer rules from %s", len(rule_set.rules), path)
    return rule_set


__all__ = [
    "LayerRuleSet",
    "RULE_SET_SCHEMA",
    "load_rule_set",
    "rule_set_from_mapping",
    "rule_set_from_string",
]

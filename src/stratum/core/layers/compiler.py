"""Compile layer rules into a queryable allocation.

Both entry points run the same pipeline:

    rules -> build_layer_graph -> find_rule_conflict -> allocate_base_indices
          -> LayerProvider

``compile_layers_safe`` reports a rule conflict as a failed ``Result``;
``compile_layers`` raises it and hands back a plain lookup function.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Protocol

from stratum.core.exceptions import RuleConflictError
from stratum.core.result import Result

from .allocator import allocate_base_indices
from .cycles import find_rule_conflict, trace_loop
from .graph import LayerT, Rules, build_layer_graph
from .provider import LayerProvider

logger = logging.getLogger(__name__)


class GetZIndex(Protocol[LayerT]):
    """Lookup function returned by :func:`compile_layers`."""

    z_index_dict: Dict[LayerT, int]
    provider: LayerProvider[LayerT]

    def __call__(self, layer_id: LayerT, index: Optional[int] = None) -> int: ...


def compile_layers_safe(
    rules: Rules[LayerT],
    sizes: Optional[Mapping[LayerT, int]] = None,
    base_indices: Optional[Mapping[LayerT, int]] = None,
) -> Result[LayerProvider[LayerT]]:
    """Compile ``rules`` into a :class:`LayerProvider`.

    Args:
        rules: ``(lower, upper)`` pairs; ``lower`` renders strictly below ``upper``.
        sizes: Optional per-layer capacities (default 1 slot per layer).
        base_indices: Optional pre-resolved base indices, used as-is.

    Returns:
        A successful Result with the provider, or a failed one carrying a
        ``RuleConflictError`` when the rules form a loop.
    """
    rules = tuple(rules)
    graph = build_layer_graph(rules, sizes)

    conflict = find_rule_conflict(rules, graph)
    if conflict is not None:
        error = RuleConflictError(conflict, loop=trace_loop(graph, conflict))
        logger.debug("Layer rules rejected: %s", error)
        return Result.fail(error)

    allocation = allocate_base_indices(graph, base_indices)
    logger.debug("Compiled %d layer rules into %d layers", len(rules), len(allocation))
    return Result.ok(LayerProvider(allocation, graph.sizes))


def compile_layers(
    rules: Rules[LayerT],
    sizes: Optional[Mapping[LayerT, int]] = None,
    base_indices: Optional[Mapping[LayerT, int]] = None,
) -> GetZIndex[LayerT]:
    """Compile ``rules`` and return a ``get_z_index(layer_id, index=None)`` function.

    The base index table is attached to the function as ``z_index_dict`` and
    the underlying provider as ``provider``.

    Raises:
        RuleConflictError: The rules form a loop.
    """
    provider = compile_layers_safe(rules, sizes, base_indices).unwrap()

    def get_z_index(layer_id: LayerT, index: Optional[int] = None) -> int:
        return provider.get(layer_id, index)

    get_z_index.z_index_dict = provider.get_layers_dict()  # type: ignore[attr-defined]
    get_z_index.provider = provider  # type: ignore[attr-defined]
    return get_z_index  # type: ignore[return-value]


__all__ = ["GetZIndex", "compile_layers", "compile_layers_safe"]

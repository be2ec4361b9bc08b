"""Minimal base index allocation over an acyclic layer graph."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from .graph import LayerGraph, LayerT


def allocate_base_indices(
    graph: LayerGraph[LayerT],
    base_indices: Optional[Mapping[LayerT, int]] = None,
) -> Dict[LayerT, int]:
    """Assign every layer the lowest base index its rules allow.

    A layer without dependencies starts at 0; any other layer starts right
    above the highest top edge (``base + size``) among the layers it must
    render above. Seeded layers in ``base_indices`` are taken as resolved and
    never recomputed. Seeds for layers absent from the graph are ignored.

    ``graph`` must be acyclic.
    """
    resolved: Dict[LayerT, int] = {}
    for layer, base in (base_indices or {}).items():
        if layer in graph:
            resolved[layer] = base

    for root in graph.layers:
        if root in resolved:
            continue
        pending: List[LayerT] = [root]
        while pending:
            layer = pending[-1]
            if layer in resolved:
                pending.pop()
                continue
            lowers = graph.lowers_of(layer)
            unresolved = [lower for lower in lowers if lower not in resolved]
            if unresolved:
                # Resolve dependencies first, leftmost on top.
                pending.extend(reversed(unresolved))
                continue
            pending.pop()
            resolved[layer] = max(
                (resolved[lower] + graph.size_of(lower) for lower in lowers),
                default=0,
            )

    return {layer: resolved[layer] for layer in graph.layers}


__all__ = ["allocate_base_indices"]

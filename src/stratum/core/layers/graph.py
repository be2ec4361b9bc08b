"""Dependency graph construction from layer rules.

A rule ``(lower, upper)`` states that ``lower`` renders strictly below
``upper``. The graph is kept as ``upper -> [lower, ...]`` so that walking it
from a layer visits everything that layer has to sit above.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Hashable, List, Mapping, Optional, Sequence, Tuple, TypeVar

LayerT = TypeVar("LayerT", bound=Hashable)

Rule = Tuple[LayerT, LayerT]
Rules = Sequence[Tuple[LayerT, LayerT]]

DEFAULT_LAYER_SIZE = 1


def normalize_size(size: object) -> int:
    """Coerce a configured capacity to a positive slot count (default 1).

    Integral floats such as ``2.0`` are accepted; anything else that is not a
    positive integer falls back to one slot.
    """
    if isinstance(size, float) and size.is_integer():
        size = int(size)
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        return DEFAULT_LAYER_SIZE
    return size


@dataclass(frozen=True)
class LayerGraph(Generic[LayerT]):
    """Layers discovered from rules, in first-seen order."""

    layers: Tuple[LayerT, ...]
    dependencies: Mapping[LayerT, Tuple[LayerT, ...]] = field(default_factory=dict)
    sizes: Mapping[LayerT, int] = field(default_factory=dict)

    def lowers_of(self, layer: LayerT) -> Tuple[LayerT, ...]:
        """Layers that ``layer`` must render above, in rule order."""
        return self.dependencies.get(layer, ())

    def size_of(self, layer: LayerT) -> int:
        return self.sizes.get(layer) or DEFAULT_LAYER_SIZE

    def __contains__(self, layer: object) -> bool:
        return layer in self.sizes

    def __len__(self) -> int:
        return len(self.layers)


def build_layer_graph(
    rules: Rules[LayerT],
    sizes: Optional[Mapping[LayerT, int]] = None,
) -> LayerGraph[LayerT]:
    """Build the dependency graph for ``rules``.

    No validation happens here: self rules and loops are carried into the
    graph as-is and left to the cycle detector.
    """
    overrides = sizes or {}
    lowers: Dict[LayerT, List[LayerT]] = {}
    full_sizes: Dict[LayerT, int] = {}
    layers: List[LayerT] = []

    for lower, upper in rules:
        lowers.setdefault(upper, []).append(lower)
        for layer in (lower, upper):
            if layer not in full_sizes:
                full_sizes[layer] = normalize_size(overrides.get(layer))
                layers.append(layer)

    return LayerGraph(
        layers=tuple(layers),
        dependencies={upper: tuple(deps) for upper, deps in lowers.items()},
        sizes=full_sizes,
    )


__all__ = [
    "DEFAULT_LAYER_SIZE",
    "LayerGraph",
    "LayerT",
    "Rule",
    "Rules",
    "build_layer_graph",
    "normalize_size",
]

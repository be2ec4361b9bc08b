"""Layer ordering compiler.

Rules name pairs of layers, ``(lower, upper)``, meaning ``lower`` renders
strictly below ``upper``. Compiling them yields one base index per layer,
widened to ``size`` consecutive slots for layers that stack several items.
"""

from .allocator import allocate_base_indices
from .compiler import GetZIndex, compile_layers, compile_layers_safe
from .cycles import find_rule_conflict, strongly_connected_components, trace_loop
from .graph import DEFAULT_LAYER_SIZE, LayerGraph, Rule, Rules, build_layer_graph
from .provider import LayerProvider

__all__ = [
    "DEFAULT_LAYER_SIZE",
    "GetZIndex",
    "LayerGraph",
    "LayerProvider",
    "Rule",
    "Rules",
    "allocate_base_indices",
    "build_layer_graph",
    "compile_layers",
    "compile_layers_safe",
    "find_rule_conflict",
    "strongly_connected_components",
    "trace_loop",
]

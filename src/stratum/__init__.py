"""
Stratum - layer ordering compiler

Stratum turns "layer A renders below layer B" rules into a deterministic,
non-overlapping allocation of numeric ordering keys (z-indices), rejecting
rule sets that contradict themselves.
"""

from stratum.core.exceptions import (
    AbsentLayerError,
    IndexOutOfBoundsError,
    RuleConflictError,
    StratumError,
)
from stratum.core.layers import GetZIndex, LayerProvider, compile_layers, compile_layers_safe
from stratum.core.result import Result

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "AbsentLayerError",
    "GetZIndex",
    "IndexOutOfBoundsError",
    "LayerProvider",
    "Result",
    "RuleConflictError",
    "StratumError",
    "compile_layers",
    "compile_layers_safe",
]

from __future__ import annotations

import json
from typing import Any, Dict, Hashable, Mapping, Sequence


def quote_layer(layer_id: Hashable) -> str:
    """Render a layer id the way error messages quote it."""
    try:
        return json.dumps(layer_id)
    except TypeError:
        return json.dumps(str(layer_id))


class StratumError(Exception):
    """Base exception for Stratum."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class RuleConflictError(StratumError, ValueError):
    """Raised when layer rules contradict each other (a loop or a self rule)."""

    def __init__(
        self,
        layers: Sequence[Hashable],
        *,
        loop: Sequence[Hashable] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.layers = tuple(layers)
        self.loop = tuple(loop) if loop else self.layers
        message = "There is loop: " + " > ".join(quote_layer(l) for l in self.loop)
        ctx = dict(context or {})
        ctx["layers"] = list(self.layers)
        ctx["loop"] = list(self.loop)
        StratumError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class AbsentLayerError(StratumError, LookupError):
    """Raised when a query names a layer no rule mentions."""

    def __init__(self, layer_id: Hashable, *, context: Mapping[str, Any] | None = None) -> None:
        self.layer_id = layer_id
        message = f"There is no layer with id: {quote_layer(layer_id)}"
        ctx = dict(context or {})
        ctx["layer_id"] = layer_id
        StratumError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)


class IndexOutOfBoundsError(StratumError, IndexError):
    """Raised when a query's item index does not fit in the layer's capacity."""

    def __init__(
        self,
        layer_id: Hashable,
        index: int,
        size: int,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.layer_id = layer_id
        self.index = index
        self.size = size
        message = f"Layer {quote_layer(layer_id)} cannot contain more than {size} items"
        ctx = dict(context or {})
        ctx.update({"layer_id": layer_id, "index": index, "size": size})
        StratumError.__init__(self, message, context=ctx)
        IndexError.__init__(self, message)


class RuleSetConfigError(StratumError, ValueError):
    """Raised when a rule set document cannot be read."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        StratumError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


__all__ = [
    "StratumError",
    "RuleConflictError",
    "AbsentLayerError",
    "IndexOutOfBoundsError",
    "RuleSetConfigError",
    "quote_layer",
]

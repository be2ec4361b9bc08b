"""Read-only query facade over a compiled layer allocation."""

from __future__ import annotations

from typing import Dict, Generic, Iterator, Mapping, Optional, Tuple

from stratum.core.exceptions import AbsentLayerError, IndexOutOfBoundsError, StratumError
from stratum.core.result import Result

from .graph import DEFAULT_LAYER_SIZE, LayerT


class LayerProvider(Generic[LayerT]):
    """Resolve ``(layer, item index)`` pairs to numeric ordering keys.

    Instances are never mutated after construction, so a single provider can
    be shared between threads without locking.
    """

    __slots__ = ("_base_indices", "_sizes")

    def __init__(self, base_indices: Mapping[LayerT, int], sizes: Mapping[LayerT, int]) -> None:
        self._base_indices: Dict[LayerT, int] = dict(base_indices)
        self._sizes: Dict[LayerT, int] = dict(sizes)

    def _base_of(self, layer_id: LayerT) -> int:
        try:
            base = self._base_indices.get(layer_id)
        except TypeError:
            # Unhashable ids can never name a layer.
            raise AbsentLayerError(layer_id) from None
        if base is None:
            raise AbsentLayerError(layer_id)
        return base

    @property
    def layer_ids(self) -> Tuple[LayerT, ...]:
        return tuple(self._base_indices)

    def get(self, layer_id: LayerT, index: Optional[int] = None) -> int:
        """Return the ordering key for item ``index`` (default 0) of ``layer_id``.

        Raises:
            AbsentLayerError: No rule mentions ``layer_id``.
            IndexOutOfBoundsError: ``index`` does not fit in the layer's size.
        """
        base = self._base_of(layer_id)
        actual_index = index or 0
        size = self._sizes.get(layer_id) or DEFAULT_LAYER_SIZE
        if actual_index >= size:
            raise IndexOutOfBoundsError(layer_id, actual_index, size)
        return base + actual_index

    def get_safe(self, layer_id: LayerT, index: Optional[int] = None) -> Result[int]:
        """Like :meth:`get`, but report failures as a failed :class:`Result`."""
        try:
            return Result.ok(self.get(layer_id, index))
        except StratumError as exc:
            return Result.fail(exc)

    def get_size(self, layer_id: LayerT) -> int:
        self._base_of(layer_id)
        return self._sizes.get(layer_id) or DEFAULT_LAYER_SIZE

    def get_layers_dict(self) -> Dict[LayerT, int]:
        """Return a copy of the base index table."""
        return dict(self._base_indices)

    def __contains__(self, layer_id: object) -> bool:
        try:
            return layer_id in self._base_indices
        except TypeError:
            return False

    def __iter__(self) -> Iterator[LayerT]:
        return iter(self.layer_ids)

    def __len__(self) -> int:
        return len(self._base_indices)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._base_indices!r})"


__all__ = ["LayerProvider"]

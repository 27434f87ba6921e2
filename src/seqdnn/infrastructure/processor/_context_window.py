"""
Context windows.

A context window gives the computation of one timestep read-only access to
the adjacent timesteps. Windows are small immutable values built by the
processor for the timestep being computed and passed down explicitly through
the network structure to every layer structure; nothing stores a cursor or a
reference to another timestep.

- `StateContextWindow(sequence, index)` resolves the previous and next
  network structures by index lookup into the sequence.
- `LayerContextWindow` narrows it to one layer index, which is what layer
  structures consume (`ILayerContextWindow`).

Both lookups return `None` at the sequence boundaries; these are not errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ...domain._errors import TimestepOutOfRangeError

if TYPE_CHECKING:
    from ..layers._layer_structure import LayerStructure
    from ..network._network_structure import RecurrentNetworkStructure
    from ._sequence import NNSequence


@dataclass(frozen=True)
class StateContextWindow:
    """
    The neighbourhood of the timestep `index` of `sequence`.

    Raises
    ------
    TimestepOutOfRangeError
        If `index` is outside ``[0, sequence.length)``.
    """

    sequence: "NNSequence"
    index: int

    def __post_init__(self) -> None:
        if not (0 <= self.index < self.sequence.length):
            raise TimestepOutOfRangeError(self.index, self.sequence.length)

    def prev_state_structure(self) -> Optional["RecurrentNetworkStructure"]:
        return self.sequence.get_state_structure(self.index - 1)

    def next_state_structure(self) -> Optional["RecurrentNetworkStructure"]:
        return self.sequence.get_state_structure(self.index + 1)

    def layer(self, layer_index: int) -> "LayerContextWindow":
        return LayerContextWindow(self, layer_index)


@dataclass(frozen=True)
class LayerContextWindow:
    """The neighbourhood of one layer index within a `StateContextWindow`."""

    state_window: StateContextWindow
    layer_index: int

    def prev_state_layer(self) -> Optional["LayerStructure"]:
        structure = self.state_window.prev_state_structure()
        return structure.layers[self.layer_index] if structure is not None else None

    def next_state_layer(self) -> Optional["LayerStructure"]:
        structure = self.state_window.next_state_structure()
        return structure.layers[self.layer_index] if structure is not None else None

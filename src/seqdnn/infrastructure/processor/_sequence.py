"""
Sequence state store.

`NNSequence` keeps the per-timestep network structures of the sequence being
processed, in an arena indexed by timestep. States are appended by forward
and read back, by index, through context windows. Resetting the sequence
drops the arena.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..network._network_parameters import NetworkParameters
from ..network._network_structure import RecurrentNetworkStructure
from ._context_window import StateContextWindow


@dataclass
class SequenceState:
    """
    One timestep of a sequence.

    Attributes
    ----------
    structure : RecurrentNetworkStructure
        The network structure computed for this timestep.
    contributions : NetworkParameters, optional
        Contributions saved by a forward with contributions.
    """

    structure: RecurrentNetworkStructure
    contributions: Optional[NetworkParameters] = None


class NNSequence:
    """An ordered, index-addressable collection of `SequenceState`s."""

    def __init__(self) -> None:
        self.states: List[SequenceState] = []

    @property
    def length(self) -> int:
        return len(self.states)

    def __len__(self) -> int:
        return len(self.states)

    @property
    def last_index(self) -> int:
        """Index of the last state (``-1`` when empty)."""
        return len(self.states) - 1

    @property
    def last_structure(self) -> Optional[RecurrentNetworkStructure]:
        return self.states[-1].structure if self.states else None

    def add(
        self,
        structure: RecurrentNetworkStructure,
        contributions: Optional[NetworkParameters] = None,
    ) -> SequenceState:
        state = SequenceState(structure, contributions)
        self.states.append(state)
        return state

    def get_state_structure(self, index: int) -> Optional[RecurrentNetworkStructure]:
        """Return the structure at `index`, or `None` outside ``[0, length)``."""
        if 0 <= index < len(self.states):
            return self.states[index].structure
        return None

    def is_last(self, index: int) -> bool:
        return index == self.last_index

    def context_window(self, index: int) -> StateContextWindow:
        """Build the context window of the state at `index`."""
        return StateContextWindow(self, index)

    def reset(self) -> None:
        self.states = []

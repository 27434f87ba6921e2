"""
Layer structure and context window contracts.

A *layer structure* is one timestep's instantiation of a layer: it owns its
input/output arrays and intermediate gate arrays, and computes against a
parameters object that is shared (never owned) by every timestep.

A *layer context window* gives a layer structure read-only access to the
layer structure of the same layer index at the previous and next timestep.
Windows are built per call by the processor, so a layer structure never holds
a reference to another timestep.

Notes
-----
- The contracts are structural (`Protocol`) so that new cell variants can be
  plugged in without inheriting from a specific base class.
- `backward` writes parameter gradients into a caller-owned buffer and never
  touches the shared parameters.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ILayerContextWindow(Protocol):
    """
    Read-only access to the adjacent timesteps of one layer index.

    Both lookups return ``None`` at the sequence boundaries.
    """

    def prev_state_layer(self) -> Optional["ILayerStructure"]:
        """Return the layer structure at the previous timestep, if any."""
        ...

    def next_state_layer(self) -> Optional["ILayerStructure"]:
        """Return the layer structure at the next timestep, if any."""
        ...


@runtime_checkable
class ILayerStructure(Protocol):
    """
    One timestep of a layer.

    Required methods
    ----------------
    - `forward(window, use_dropout)` computes the output values.
    - `forward_with_contributions(contributions, window, use_dropout)` computes
      the same output values and records per-source contributions.
    - `backward(output_errors, params_errors, propagate_to_input, window)`
      computes parameter gradients, optionally the input gradients, and the
      gradient destined for the previous timestep.
    """

    def forward(
        self,
        window: Optional[ILayerContextWindow] = None,
        use_dropout: bool = False,
    ) -> None:
        """Forward the input array to the output array."""
        ...

    def forward_with_contributions(
        self,
        contributions: Any,
        window: Optional[ILayerContextWindow] = None,
        use_dropout: bool = False,
    ) -> None:
        """Forward while saving the contributions of each weight."""
        ...

    def backward(
        self,
        output_errors: Any,
        params_errors: Any,
        propagate_to_input: bool = False,
        window: Optional[ILayerContextWindow] = None,
    ) -> None:
        """Backward the output errors through this timestep."""
        ...


@runtime_checkable
class IPoolItem(Protocol):
    """
    An item managed by an object pool.

    Items carry a stable integer id and can be reset before being reused.
    """

    @property
    def id(self) -> int:
        """Return the stable id assigned by the pool."""
        ...

    def reset(self) -> None:
        """Clear any per-usage state."""
        ...

"""
Domain-level update method contracts for seqdnn.

This module defines the `IUpdateMethod` protocol, which specifies the minimal
interface required for weight-update strategies (e.g. plain learning rate,
momentum, AdaGrad, ADAM), together with the optional scheduling capabilities
a strategy may implement.

Notes
-----
- An update method mutates one parameter array in place given a gradient that
  has been computed elsewhere (typically the averaged output of a gradient
  accumulator). How the gradient is obtained is outside the scope of these
  protocols.
- Scheduling capabilities are optional: callers check them with
  ``isinstance`` and treat an absent capability as a no-op.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IUpdateMethod(Protocol):
    """
    Update method interface contract.

    Required methods
    ----------------
    - `update(array, errors)` applies one update to `array` in place.
    """

    def update(self, array: Any, errors: Any) -> None:
        """
        Apply one update step to a parameter array.

        Parameters
        ----------
        array : UpdatableArray
            The parameter array to update in place.
        errors : ndarray
            The gradient of the loss with respect to `array`, same shape.
        """
        ...


@runtime_checkable
class IEpochScheduling(Protocol):
    """Capability of reacting to the start of a new epoch."""

    def on_new_epoch(self) -> None:
        """Called when a new epoch starts."""
        ...


@runtime_checkable
class IBatchScheduling(Protocol):
    """Capability of reacting to the start of a new batch."""

    def on_new_batch(self) -> None:
        """Called when a new batch starts."""
        ...


@runtime_checkable
class IExampleScheduling(Protocol):
    """Capability of reacting to the start of a new example."""

    def on_new_example(self) -> None:
        """Called when a new example starts."""
        ...


@runtime_checkable
class IDecayMethod(Protocol):
    """
    Learning rate decay schedule.

    `update(learning_rate, time_step)` returns the decayed learning rate for
    the given (1-based) time step.
    """

    def update(self, learning_rate: float, time_step: int) -> float:
        """Return the decayed learning rate."""
        ...

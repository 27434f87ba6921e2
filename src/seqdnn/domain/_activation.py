"""
Activation function contract.

This module defines `IActivationFunction`, the structural interface that the
engine consumes from the tensor layer for activation evaluation and
differentiation.

Notes
-----
- `df_optimized` expresses the derivative in terms of the *activated* value
  where the function admits it (e.g. ``tanh'(x) = 1 - tanh(x)^2``). Layer
  structures rely on it so that backward never needs to re-evaluate `f`.
- Domain contracts are backend-agnostic; infrastructure implementations use
  NumPy arrays.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IActivationFunction(Protocol):
    """
    Elementwise activation function with its derivative.

    Required members
    ----------------
    - `name` registry key used by configuration dictionaries.
    - `f(x)` evaluates the activation.
    - `df(x)` evaluates the derivative at the not-activated values.
    - `df_optimized(fx)` evaluates the derivative from the activated values.
    """

    @property
    def name(self) -> str:
        """Return the registry name of this activation."""
        ...

    def f(self, x: Any) -> Any:
        """Return the activation of `x`."""
        ...

    def df(self, x: Any) -> Any:
        """Return the derivative evaluated at the not-activated values `x`."""
        ...

    def df_optimized(self, fx: Any) -> Any:
        """Return the derivative evaluated from the activated values `fx`."""
        ...

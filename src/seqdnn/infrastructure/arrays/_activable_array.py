"""
Activatable arrays.

An `ActivableArray` is a 1-D vector of values that can optionally carry an
activation function. Calling `activate()` snapshots the current values as the
*not-activated* values and replaces the values with their activation, so that
both forms stay available for backward.

Notes
-----
- Without an activation function, `values_not_activated` is the same array as
  `values`.
- Values are always written in place, so views handed out by `values` remain
  bound to the array until the next assignment.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._activation import IActivationFunction
from ...domain._errors import ShapeMismatchError


def _as_vector(values, what: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ShapeMismatchError((arr.size,), arr.shape, what)
    return arr


class ActivableArray:
    """
    A vector of values with an optional activation function.

    Parameters
    ----------
    size : int
        Number of elements. Must be positive.
    """

    def __init__(self, size: int) -> None:
        if int(size) <= 0:
            raise ValueError(f"size must be > 0, got {size}")
        self.size = int(size)
        self._values = np.zeros(self.size, dtype=np.float64)
        self._values_not_activated: Optional[np.ndarray] = None
        self.activation_function: Optional[IActivationFunction] = None

    @classmethod
    def from_values(cls, values) -> "ActivableArray":
        """Build an array of the same length holding a copy of `values`."""
        arr = _as_vector(values, "values")
        out = cls(arr.shape[0])
        out.assign_values(arr)
        return out

    @property
    def values(self) -> np.ndarray:
        """The current (activated, if `activate` was called) values."""
        return self._values

    @property
    def values_not_activated(self) -> np.ndarray:
        """The values before the last activation, or `values` if none."""
        if self._values_not_activated is not None:
            return self._values_not_activated
        return self._values

    @property
    def has_activation(self) -> bool:
        return self.activation_function is not None

    @property
    def shape(self) -> tuple[int, ...]:
        return self._values.shape

    def assign_values(self, values) -> None:
        """
        Copy `values` into this array.

        Raises
        ------
        ShapeMismatchError
            If `values` does not have shape ``(size,)``.
        """
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != self._values.shape:
            raise ShapeMismatchError(self._values.shape, arr.shape, "values")
        np.copyto(self._values, arr)

    def set_activation(self, activation_function: IActivationFunction) -> None:
        self.activation_function = activation_function

    def activate(self) -> None:
        """
        Apply the activation function in place.

        The current values are kept as `values_not_activated`. Does nothing when
        no activation function is set.
        """
        if not self.has_activation:
            return
        if self._values_not_activated is None:
            self._values_not_activated = np.empty_like(self._values)
        np.copyto(self._values_not_activated, self._values)
        np.copyto(self._values, self.activation_function.f(self._values_not_activated))

    def get_activated_values(self) -> np.ndarray:
        """Return a new array with the activation of `values_not_activated`."""
        if not self.has_activation:
            raise ValueError("Cannot get activated values: no activation function set.")
        return self.activation_function.f(self.values_not_activated)

    def calculate_activation_deriv(self) -> np.ndarray:
        """Return the activation derivative computed from the activated values."""
        if not self.has_activation:
            raise ValueError(
                "Cannot compute the derivative: no activation function set."
            )
        return self.activation_function.df_optimized(self._values)

    def clone(self) -> "ActivableArray":
        cloned = ActivableArray(self.size)
        self._copy_into(cloned)
        return cloned

    def _copy_into(self, other: "ActivableArray") -> None:
        np.copyto(other._values, self._values)
        if self.has_activation:
            other._values_not_activated = self.values_not_activated.copy()
            other.set_activation(self.activation_function)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, values={self._values!r})"

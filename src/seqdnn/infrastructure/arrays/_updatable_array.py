"""
Storage of one trainable array.

An `UpdatableArray` wraps a NumPy array of any rank (weight matrices, bias
vectors, DeltaRNN gating vectors). Parameters objects, gradient buffers and
contributions buffers are all made of `UpdatableArray`s laid out in the same
fixed order, which is what lets accumulators and optimizers pair them
positionally.

Update methods keep their per-array state keyed by ``id(array)``, so an
`UpdatableArray` must keep its identity for the lifetime of the model: values
are always assigned in place.
"""

from __future__ import annotations

import numpy as np

from ...domain._errors import ShapeMismatchError


class UpdatableArray:
    """
    A trainable array.

    Parameters
    ----------
    values : array_like
        Initial values; copied as float64.
    name : str
        Optional label (e.g. ``"input_gate.weights"``) used in error messages.
    """

    def __init__(self, values, name: str = "") -> None:
        self._values = np.array(values, dtype=np.float64, copy=True)
        self.name = name

    @classmethod
    def zeros(cls, shape: tuple[int, ...], name: str = "") -> "UpdatableArray":
        return cls(np.zeros(shape, dtype=np.float64), name=name)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def shape(self) -> tuple[int, ...]:
        return self._values.shape

    def assign_values(self, values) -> None:
        """
        Copy `values` in place.

        Raises
        ------
        ShapeMismatchError
            If the shapes differ.
        """
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != self._values.shape:
            raise ShapeMismatchError(
                self._values.shape, arr.shape, self.name or "parameter"
            )
        np.copyto(self._values, arr)

    def copy(self) -> "UpdatableArray":
        return UpdatableArray(self._values, name=self.name)

    def zeros_like(self) -> "UpdatableArray":
        return UpdatableArray.zeros(self._values.shape, name=self.name)

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"UpdatableArray({label}shape={self.shape})"

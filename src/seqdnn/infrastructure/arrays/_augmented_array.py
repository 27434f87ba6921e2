"""
Augmented arrays: activatable arrays that also carry errors.

Layer structures use `AugmentedArray` for their input, output and gate arrays.
The errors slot holds the gradient of the loss with respect to the array's
(activated) values and is written by backward.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ._activable_array import ActivableArray
from ...domain._errors import ShapeMismatchError


class AugmentedArray(ActivableArray):
    """
    An `ActivableArray` with an errors slot of the same shape.

    Reading `errors` before they were assigned raises `ValueError`.
    """

    def __init__(self, size: int) -> None:
        super().__init__(size)
        self._errors: Optional[np.ndarray] = None

    @property
    def has_errors(self) -> bool:
        return self._errors is not None

    @property
    def errors(self) -> np.ndarray:
        if self._errors is None:
            raise ValueError("Errors have not been assigned to this array yet.")
        return self._errors

    def assign_errors(self, errors) -> None:
        """
        Copy `errors` into the errors slot.

        Raises
        ------
        ShapeMismatchError
            If `errors` does not have shape ``(size,)``.
        """
        arr = np.asarray(errors, dtype=np.float64)
        if arr.shape != self._values.shape:
            raise ShapeMismatchError(self._values.shape, arr.shape, "errors")
        if self._errors is None:
            self._errors = arr.copy()
        else:
            np.copyto(self._errors, arr)

    def clear_errors(self) -> None:
        self._errors = None

    def clone(self) -> "AugmentedArray":
        cloned = AugmentedArray(self.size)
        self._copy_into(cloned)
        if self._errors is not None:
            cloned._errors = self._errors.copy()
        return cloned

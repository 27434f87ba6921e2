"""
Gradient accumulator.

`ParamsErrorsAccumulator` sums parameter gradients over a sequence (or a
batch) and averages them. It works with any parameters container that is
iterable over `UpdatableArray`s in a fixed order and provides `copy()`:
`NetworkParameters` or a single `LayerParameters`.

Laws
----
- After accumulating ``g1 .. gn``, `average_errors()` leaves ``(g1+..+gn)/n``.
- `average_errors()` divides by `count` every time it is called; it is not
  idempotent.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ...domain._errors import EmptyAccumulatorError, ShapeMismatchError


class ParamsErrorsAccumulator:
    """Sum and average parameter gradients."""

    def __init__(self) -> None:
        self._params_errors: Optional[Any] = None
        self._count = 0

    @property
    def count(self) -> int:
        """Number of gradients accumulated since the last reset."""
        return self._count

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    def accumulate(self, params_errors: Any, copy: bool = True) -> None:
        """
        Add `params_errors` to the accumulated gradients.

        The first call stores `params_errors` (a copy of it when `copy` is
        set); later calls sum elementwise.

        Raises
        ------
        ShapeMismatchError
            If `params_errors` does not match the accumulated layout.
        """
        if self._params_errors is None:
            self._params_errors = params_errors.copy() if copy else params_errors
        else:
            acc_list = list(self._params_errors)
            new_list = list(params_errors)
            if len(acc_list) != len(new_list):
                raise ShapeMismatchError(
                    (len(acc_list),), (len(new_list),), "params errors layout"
                )
            for acc, err in zip(acc_list, new_list):
                if acc.shape != err.shape:
                    raise ShapeMismatchError(
                        acc.shape, err.shape, acc.name or "params errors"
                    )
                np.add(acc.values, err.values, out=acc.values)
        self._count += 1

    def average_errors(self) -> None:
        """
        Divide the accumulated gradients by `count`.

        Raises
        ------
        EmptyAccumulatorError
            If nothing has been accumulated.
        """
        if self._count == 0:
            raise EmptyAccumulatorError()
        if self._count > 1:
            for acc in self._params_errors:
                np.divide(acc.values, self._count, out=acc.values)

    def get_params_errors(self, copy: bool = True) -> Any:
        if self._params_errors is None:
            raise EmptyAccumulatorError()
        return self._params_errors.copy() if copy else self._params_errors

    def reset(self) -> None:
        self._params_errors = None
        self._count = 0

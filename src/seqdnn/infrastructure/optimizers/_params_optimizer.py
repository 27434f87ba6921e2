"""
Parameters optimizer.

`ParamsOptimizer` ties a parameters container to an update method: it
accumulates the gradients of several examples, averages them, and applies the
update method to every ``(parameter, gradient)`` pair. Scheduling hooks are
forwarded to whichever capabilities the update method implements.
"""

from __future__ import annotations

import logging
from typing import Any

from ._accumulator import ParamsErrorsAccumulator
from ...domain._update_method import (
    IBatchScheduling,
    IEpochScheduling,
    IExampleScheduling,
    IUpdateMethod,
)

logger = logging.getLogger(__name__)


class ParamsOptimizer:
    """
    Accumulate gradients and update parameters.

    Parameters
    ----------
    params : NetworkParameters or LayerParameters
        The parameters to update in place.
    update_method : IUpdateMethod
        The update strategy.
    """

    def __init__(self, params: Any, update_method: IUpdateMethod) -> None:
        if not isinstance(update_method, IUpdateMethod):
            raise TypeError(
                "update_method must implement update(), "
                f"got {type(update_method).__name__}"
            )
        self.params = params
        self.update_method = update_method
        self._accumulator = ParamsErrorsAccumulator()

    @property
    def accumulated_count(self) -> int:
        return self._accumulator.count

    def accumulate(self, params_errors: Any, copy: bool = True) -> None:
        """Accumulate the gradients of one example (or one sequence)."""
        self._accumulator.accumulate(params_errors, copy=copy)

    def update(self) -> None:
        """
        Average the accumulated gradients, apply them, and reset.

        Does nothing when no gradients have been accumulated.
        """
        if self._accumulator.is_empty:
            return

        count = self._accumulator.count
        self._accumulator.average_errors()
        errors = self._accumulator.get_params_errors(copy=False)
        for param, error in zip(self.params, errors):
            self.update_method.update(param, error.values)
        self._accumulator.reset()

        logger.debug(
            "Updated parameters with %s from %d accumulated gradients",
            type(self.update_method).__name__,
            count,
        )

    def new_epoch(self) -> None:
        if isinstance(self.update_method, IEpochScheduling):
            self.update_method.on_new_epoch()

    def new_batch(self) -> None:
        if isinstance(self.update_method, IBatchScheduling):
            self.update_method.on_new_batch()

    def new_example(self) -> None:
        if isinstance(self.update_method, IExampleScheduling):
            self.update_method.on_new_example()
